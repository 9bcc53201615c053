import logging
import secrets
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData, UploadFile

from bigjohn.errors.contentErrors import AuthError, IdentityProviderError
from bigjohn.web.apiClient import ApiClientError, PendingFile
from bigjohn.web.authStatus import SessionAuthStatus
from bigjohn.web.guards import editor_guard, enforce, vip_guard
from bigjohn.web.sanitize import clean_embed
from bigjohn.web.views import VIP_MEDIA_FIELDS, NewsEditor, NewsFeed, Playlist, Track, VipArea

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["embed"] = clean_embed

router = APIRouter()

EDITOR_ID_KEY = "editor_id"

PLAYLIST = [
    Track(title="JUMP UP", src="/assets/YouandIforever-2.mp3"),
    Track(title="Destiny Killer", src="/assets/Big John - Destiny Killer  Edith.mp3"),
    Track(title="Song 3", src="/assets/song3.mp3"),
]


def get_auth(request: Request) -> SessionAuthStatus:
    return SessionAuthStatus(request.session)


def require_editor(auth: SessionAuthStatus = Depends(get_auth)) -> SessionAuthStatus:
    enforce(editor_guard, auth)
    return auth


def require_vip(auth: SessionAuthStatus = Depends(get_auth)) -> SessionAuthStatus:
    enforce(vip_guard, auth)
    return auth


def get_editor(request: Request) -> NewsEditor:
    editor_id = request.session.get(EDITOR_ID_KEY)
    if not editor_id:
        editor_id = uuid.uuid4().hex
        request.session[EDITOR_ID_KEY] = editor_id
    return request.app.state.editors.get(editor_id)


async def track_visit(request: Request, auth: SessionAuthStatus) -> None:
    if not (auth.is_authenticated and auth.user_id):
        return
    try:
        await request.app.state.api.track_user(auth.user_id, auth.access_token)
    except ApiClientError as e:
        logger.warning("⚠️ Could not record visit for %s: %s", auth.user_id, e)


# ---------- Home ----------
@router.get("/")
async def home(request: Request, track: int = 0, auth: SessionAuthStatus = Depends(get_auth)):
    feed = NewsFeed(request.app.state.api, request.app.state.codec)
    await feed.refresh(auth.access_token)
    await track_visit(request, auth)
    return templates.TemplateResponse(request, "home.html", {
        "auth": auth,
        "feed": feed,
        "playlist": Playlist(PLAYLIST, index=track),
    })


# ---------- Identity provider login ----------
@router.get("/login")
async def login(request: Request, auth: SessionAuthStatus = Depends(get_auth)):
    identity = request.app.state.identity
    state = identity.new_state()
    auth.remember_state(state)
    return RedirectResponse(identity.authorize_url(state), status_code=303)


@router.get("/callback")
async def callback(request: Request, code: Optional[str] = None, state: Optional[str] = None,
                   auth: SessionAuthStatus = Depends(get_auth)):
    expected_state = auth.pop_state()
    if not code or not expected_state or not secrets.compare_digest(expected_state, state or ""):
        logger.warning("⚠️ Login callback with a missing code or mismatched state")
        return RedirectResponse("/", status_code=303)
    identity = request.app.state.identity
    try:
        tokens = await identity.exchange_code(code)
        claims = await run_in_threadpool(identity.verify_token, tokens["access_token"])
    except (IdentityProviderError, AuthError, KeyError) as e:
        logger.error("❌ Login failed: %s", e)
        return RedirectResponse("/", status_code=303)
    auth.login(tokens, claims)
    logger.info("✅ %s logged in", auth.user_id)
    return RedirectResponse("/", status_code=303)


@router.get("/logout")
async def logout(request: Request, auth: SessionAuthStatus = Depends(get_auth)):
    auth.logout()
    return_to = str(request.base_url).rstrip("/")
    return RedirectResponse(request.app.state.identity.logout_url(return_to), status_code=303)


# ---------- VIP ----------
@router.get("/vip")
async def vip(request: Request, audio: int = 0, video: int = 0, auth: SessionAuthStatus = Depends(require_vip)):
    area = VipArea(request.app.state.api, request.app.state.codec, audio_index=audio, video_index=video)
    await area.refresh(auth.access_token)
    await track_visit(request, auth)
    return templates.TemplateResponse(request, "vip.html", {"auth": auth, "area": area})


# ---------- Editor ----------
@router.get("/johns-news/login")
async def editor_login_form(request: Request, auth: SessionAuthStatus = Depends(get_auth)):
    if auth.editor_unlocked:
        return RedirectResponse("/johns-news", status_code=303)
    return templates.TemplateResponse(request, "editor_login.html", {"auth": auth, "error": None})


@router.post("/johns-news/login")
async def editor_login(request: Request, password: str = Form(""), auth: SessionAuthStatus = Depends(get_auth)):
    expected = request.app.state.settings.editor_password
    if expected and secrets.compare_digest(password, expected):
        auth.unlock_editor()
        return RedirectResponse("/johns-news", status_code=303)
    return templates.TemplateResponse(
        request, "editor_login.html", {"auth": auth, "error": "Incorrect password"}, status_code=401,
    )


@router.get("/johns-news")
async def editor_page(request: Request, auth: SessionAuthStatus = Depends(require_editor)):
    editor = get_editor(request)
    await editor.refresh_all(auth.access_token)
    return templates.TemplateResponse(request, "editor.html", {
        "auth": auth,
        "editor": editor,
        "notice": editor.take_notice(),
    })


def _int(form: FormData, name: str, default: int = 0) -> int:
    try:
        return int(form.get(name, default))
    except (TypeError, ValueError):
        return default


async def _pending(form: FormData, name: str) -> Optional[PendingFile]:
    upload = form.get(name)
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    return PendingFile(filename=upload.filename, content=await upload.read(), content_type=upload.content_type)


async def apply_editor_action(editor: NewsEditor, form: FormData, token: Optional[str]) -> None:
    action = form.get("action", "")

    # the main editor form always carries its fields, keep them in sync first
    if "title" in form:
        editor.title = form.get("title", "")
    if "link" in form:
        editor.link = form.get("link", "")
    if "content" in form:
        editor.sync_text(form.get("content"))

    if action == "save":
        await editor.save(token)
    elif action == "clear":
        editor.reset()
    elif action == "edit":
        post = editor.find_post(form.get("post_id", ""))
        if post is not None:
            editor.edit(post)
    elif action == "delete":
        await editor.delete(form.get("post_id", ""), token)
    elif action == "style":
        editor.toggle_inline_style(_int(form, "block_index"), _int(form, "offset"), _int(form, "length"),
                                   form.get("style", "BOLD"))
    elif action == "block":
        editor.toggle_block_type(_int(form, "block_index"), form.get("block_type", "unstyled"))
    elif action == "open_link":
        editor.open_link_dialog()
    elif action == "cancel_link":
        editor.cancel_link_dialog()
    elif action == "confirm_link":
        editor.confirm_link(form.get("url", ""), form.get("anchor") or None)
    elif action == "open_image":
        editor.open_image_dialog()
    elif action == "cancel_image":
        editor.cancel_image_dialog()
    elif action == "confirm_image":
        editor.confirm_image(form.get("image_src", ""))
    elif action == "open_upload":
        editor.open_upload_dialog()
    elif action == "cancel_upload":
        editor.cancel_upload_dialog()
    elif action == "upload":
        editor.choose_upload(await _pending(form, "upload_file"))
        await editor.upload_pending_image(token)
    elif action == "save_spotify":
        editor.spotify_embed_url = form.get("embed_url", "")
        await editor.save_spotify_embed(token)
    elif action == "delete_spotify":
        await editor.delete_spotify_embed(form.get("embed_id", ""), token)
    elif action == "vip_submit":
        editor.vip_title = form.get("vip_title", "")
        editor.vip_description = form.get("vip_description", "")
        for field_name in VIP_MEDIA_FIELDS:
            editor.choose_vip_file(field_name, await _pending(form, field_name))
        await editor.submit_vip(token)
    elif action == "vip_edit":
        post = next((p for p in editor.vip_posts if (p.get("_id") or p.get("id")) == form.get("post_id")), None)
        if post is not None:
            editor.edit_vip(post)
    elif action == "vip_delete":
        await editor.delete_vip(form.get("post_id", ""), token)
    else:
        logger.warning("⚠️ Unknown editor action: %r", action)


@router.post("/johns-news/action")
async def editor_action(request: Request, auth: SessionAuthStatus = Depends(require_editor)):
    editor = get_editor(request)
    form = await request.form()
    try:
        await apply_editor_action(editor, form, auth.access_token)
    except (ValueError, IndexError) as e:
        logger.warning("⚠️ Rejected editor action: %s", e)
        editor.notice = str(e)
    return RedirectResponse("/johns-news", status_code=303)
