import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bigjohn.richtext.document import Document
from bigjohn.richtext.draftCodec import DraftRawCodec, RichTextCodec, RichTextError
from bigjohn.web.apiClient import ApiClientError, PendingFile

logger = logging.getLogger(__name__)

TOP_N = 5
VIP_MEDIA_FIELDS = ("image", "video", "audio")


def parse_upload_date(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def newest_first(items: List[Dict]) -> List[Dict]:
    return sorted(items, key=lambda item: parse_upload_date(item.get("uploadDate")), reverse=True)


def document_id(item: Dict) -> str:
    return item.get("_id") or item.get("id")


# ---------- Home page ----------
@dataclass
class Track:
    title: str
    src: str


class Playlist:
    """Home page player; previous/next stop at the ends of the list."""

    def __init__(self, tracks: List[Track], index: int = 0):
        self.tracks = tracks
        self.index = max(0, min(index, len(tracks) - 1)) if tracks else 0

    @property
    def current(self) -> Optional[Track]:
        return self.tracks[self.index] if self.tracks else None

    @property
    def has_previous(self) -> bool:
        return self.index > 0

    @property
    def has_next(self) -> bool:
        return self.index < len(self.tracks) - 1

    def next(self) -> int:
        if self.has_next:
            self.index += 1
        return self.index

    def previous(self) -> int:
        if self.has_previous:
            self.index -= 1
        return self.index


class NewsFeed:
    """Latest news posts and Spotify releases, fetched with whatever identity the visitor has."""

    def __init__(self, api, codec: Optional[RichTextCodec] = None):
        self.api = api
        self.codec = codec or DraftRawCodec()
        self.posts: List[Dict] = []
        self.embeds: List[Dict] = []

    async def refresh(self, token: Optional[str] = None) -> None:
        try:
            posts = await self.api.fetch_news(token)
            self.posts = [self._render(post) for post in newest_first(posts)[:TOP_N]]
        except ApiClientError as e:
            logger.error("❌ Error fetching news: %s", e)
        try:
            embeds = await self.api.fetch_spotify(token)
            if isinstance(embeds, list):
                self.embeds = newest_first(embeds)
            else:
                logger.error("❌ Expected a list of Spotify embeds but got: %r", embeds)
        except ApiClientError as e:
            logger.error("❌ Error fetching Spotify embeds: %s", e)

    def _render(self, post: Dict) -> Dict:
        return {**post, "html": self.codec.render_serialized(post.get("content"))}

    @property
    def latest_embed(self) -> Optional[Dict]:
        return self.embeds[0] if self.embeds else None


# ---------- VIP area ----------
class VipArea:
    """
    Members area. Audio and video each have their own cursor over the posts
    carrying that media; stepping past either end wraps around.
    """

    def __init__(self, api, codec: Optional[RichTextCodec] = None, audio_index: int = 0, video_index: int = 0):
        self.api = api
        self.codec = codec or DraftRawCodec()
        self.posts: List[Dict] = []
        self.audio_index = audio_index
        self.video_index = video_index

    async def refresh(self, token: Optional[str]) -> None:
        try:
            posts = await self.api.fetch_vip(token)
        except ApiClientError as e:
            logger.error("❌ Error fetching VIP content: %s", e)
            return
        self.posts = [self._render(post) for post in newest_first(posts)]
        self.audio_index = self._clamp(self.audio_index, len(self.audio_posts))
        self.video_index = self._clamp(self.video_index, len(self.video_posts))

    def _render(self, post: Dict) -> Dict:
        description = post.get("description")
        html = None
        if description:
            try:
                html = self.codec.render_to_markup(self.codec.deserialize(description))
            except RichTextError:
                # the VIP form stores its description as plain text
                html = self.codec.render_to_markup(Document.from_plain_text(description))
        return {**post, "html": html, "mediaUrl": post.get("mediaUrl") or {}}

    @staticmethod
    def _clamp(index: int, size: int) -> int:
        return index % size if size else 0

    @property
    def audio_posts(self) -> List[Dict]:
        return [post for post in self.posts if post["mediaUrl"].get("audioUrl")]

    @property
    def video_posts(self) -> List[Dict]:
        return [post for post in self.posts if post["mediaUrl"].get("videoUrl")]

    @property
    def current_audio(self) -> Optional[Dict]:
        audio = self.audio_posts
        return audio[self.audio_index] if audio else None

    @property
    def current_video(self) -> Optional[Dict]:
        video = self.video_posts
        return video[self.video_index] if video else None

    def next_audio(self) -> int:
        self.audio_index = self._clamp(self.audio_index + 1, len(self.audio_posts))
        return self.audio_index

    def previous_audio(self) -> int:
        self.audio_index = self._clamp(self.audio_index - 1, len(self.audio_posts))
        return self.audio_index

    def next_video(self) -> int:
        self.video_index = self._clamp(self.video_index + 1, len(self.video_posts))
        return self.video_index

    def previous_video(self) -> int:
        self.video_index = self._clamp(self.video_index - 1, len(self.video_posts))
        return self.video_index


# ---------- Editor ----------
class NewsEditor:
    """
    State behind the content editor page.

    Holds the document being written, the insertion dialogs, a pending image
    upload, the VIP upload form and the latest five items of each content type.
    Every write goes to the API first and the lists are fetched again
    afterwards; nothing is updated optimistically.
    """

    def __init__(self, api, codec: Optional[RichTextCodec] = None):
        self.api = api
        self.codec = codec or DraftRawCodec()

        self.document = Document.empty()
        self.title = ""
        self.link = ""
        self.image_url = ""
        self.editing_post_id: Optional[str] = None

        self.link_dialog_open = False
        self.image_dialog_open = False
        self.upload_dialog_open = False
        self.pending_upload: Optional[PendingFile] = None

        self.spotify_embed_url = ""

        self.vip_title = ""
        self.vip_description = ""
        self.vip_files: Dict[str, Optional[PendingFile]] = {field: None for field in VIP_MEDIA_FIELDS}

        self.posts: List[Dict] = []
        self.spotify_embeds: List[Dict] = []
        self.vip_posts: List[Dict] = []
        self.daily_active_users: List[Dict] = []

        self.notice: Optional[str] = None

    # ---------- fetching ----------
    async def fetch_posts(self, token: Optional[str]) -> None:
        try:
            self.posts = newest_first(await self.api.fetch_news(token))[:TOP_N]
        except ApiClientError as e:
            logger.error("❌ Error fetching news posts: %s", e)

    async def fetch_spotify_embeds(self, token: Optional[str]) -> None:
        try:
            embeds = await self.api.fetch_spotify(token)
            self.spotify_embeds = newest_first(embeds)[:TOP_N] if isinstance(embeds, list) else []
        except ApiClientError as e:
            logger.error("❌ Error fetching Spotify embeds: %s", e)

    async def fetch_vip_posts(self, token: Optional[str]) -> None:
        try:
            self.vip_posts = newest_first(await self.api.fetch_vip(token))[:TOP_N]
        except ApiClientError as e:
            logger.error("❌ Error fetching VIP posts: %s", e)

    async def fetch_daily_active_users(self, token: Optional[str]) -> None:
        if not token:
            return
        try:
            self.daily_active_users = await self.api.fetch_daily_active_users(token)
        except ApiClientError as e:
            logger.error("❌ Error fetching daily active users: %s", e)

    async def refresh_all(self, token: Optional[str]) -> None:
        await self.fetch_posts(token)
        await self.fetch_spotify_embeds(token)
        await self.fetch_vip_posts(token)
        await self.fetch_daily_active_users(token)

    # ---------- document ----------
    @property
    def content_text(self) -> str:
        return self.document.to_plain_text()

    @property
    def preview_html(self) -> str:
        return self.codec.render_to_markup(self.document)

    def sync_text(self, text: Optional[str]) -> None:
        # re-parsing plain text drops inline styles and links, so only do it when the text changed
        if text is None:
            return
        text = text.replace("\r\n", "\n")
        if text != self.content_text:
            self.document = Document.from_plain_text(text)

    def toggle_inline_style(self, block_index: int, offset: int, length: int, style: str) -> None:
        self.document.toggle_inline_style(block_index, offset, length, style)

    def toggle_block_type(self, block_index: int, block_type: str) -> None:
        self.document.toggle_block_type(block_index, block_type)

    def open_link_dialog(self) -> None:
        self.link_dialog_open = True

    def cancel_link_dialog(self) -> None:
        self.link_dialog_open = False

    def confirm_link(self, url: str, anchor_text: Optional[str] = None) -> None:
        """
        Link the first occurrence of `anchor_text`; when it is missing or not
        found, a new paragraph showing the URL is linked instead.
        """
        url = (url or "").strip()
        if url:
            for index, block in enumerate(self.document.blocks):
                position = block.text.find(anchor_text) if anchor_text else -1
                if position >= 0:
                    self.document.apply_link(index, position, len(anchor_text), url)
                    break
            else:
                self.document.blocks.append(Document.from_plain_text(anchor_text or url).blocks[0])
                last = len(self.document.blocks) - 1
                self.document.apply_link(last, 0, len(self.document.blocks[last].text), url)
        self.link_dialog_open = False

    def open_image_dialog(self) -> None:
        self.image_dialog_open = True

    def cancel_image_dialog(self) -> None:
        self.image_dialog_open = False

    def confirm_image(self, src: str) -> None:
        src = (src or "").strip()
        if src:
            self.document.insert_image(src)
        self.image_dialog_open = False

    # ---------- inline image upload ----------
    def open_upload_dialog(self) -> None:
        self.upload_dialog_open = True

    def cancel_upload_dialog(self) -> None:
        self.upload_dialog_open = False
        self.pending_upload = None

    def choose_upload(self, pending: Optional[PendingFile]) -> None:
        self.pending_upload = pending

    async def upload_pending_image(self, token: str) -> Optional[str]:
        if self.pending_upload is None:
            return None
        try:
            url = await self.api.upload_image(self.pending_upload, token)
        except ApiClientError as e:
            logger.error("❌ There was an error uploading the image: %s", e)
            self.notice = "Image upload failed"
            return None
        self.image_url = url
        self.pending_upload = None
        self.upload_dialog_open = False
        self.notice = "Image uploaded successfully!"
        return url

    # ---------- news posts ----------
    def reset(self) -> None:
        self.title = ""
        self.document = Document.empty()
        self.link = ""
        self.image_url = ""
        self.editing_post_id = None

    def edit(self, post: Dict) -> None:
        self.title = post.get("title") or ""
        try:
            self.document = self.codec.deserialize(post.get("content"))
        except RichTextError:
            self.document = Document.from_plain_text(post.get("content") or "")
        self.link = post.get("link") or ""
        self.image_url = post.get("imageUrl") or ""
        self.editing_post_id = document_id(post)

    def find_post(self, post_id: str) -> Optional[Dict]:
        return next((post for post in self.posts if document_id(post) == post_id), None)

    async def save(self, token: str) -> bool:
        post = {
            "title": self.title,
            "content": self.codec.serialize(self.document),
            "imageUrl": self.image_url or None,
            "link": self.link or None,
        }
        try:
            if self.editing_post_id:
                await self.api.update_news(self.editing_post_id, post, token)
                self.notice = "News post updated!"
            else:
                await self.api.save_news(post, token)
                self.notice = "News post saved!"
        except ApiClientError as e:
            logger.error("❌ There was an error saving the news post: %s", e)
            self.notice = "Saving the news post failed"
            return False
        await self.fetch_posts(token)
        self.reset()
        return True

    async def delete(self, post_id: str, token: str) -> bool:
        try:
            await self.api.delete_news(post_id, token)
        except ApiClientError as e:
            logger.error("❌ There was an error deleting the news post: %s", e)
            self.notice = "Deleting the news post failed"
            return False
        self.notice = "News post deleted!"
        if self.editing_post_id == post_id:
            self.reset()
        await self.fetch_posts(token)
        return True

    # ---------- Spotify ----------
    async def save_spotify_embed(self, token: str) -> bool:
        if not self.spotify_embed_url.strip():
            return False
        try:
            await self.api.save_spotify(self.spotify_embed_url, token)
        except ApiClientError as e:
            logger.error("❌ There was an error saving the Spotify embed: %s", e)
            self.notice = "Saving the Spotify embed failed"
            return False
        self.notice = "Spotify embed saved!"
        self.spotify_embed_url = ""
        await self.fetch_spotify_embeds(token)
        return True

    async def delete_spotify_embed(self, embed_id: str, token: str) -> bool:
        try:
            await self.api.delete_spotify(embed_id, token)
        except ApiClientError as e:
            logger.error("❌ There was an error deleting the Spotify embed: %s", e)
            self.notice = "Deleting the Spotify embed failed"
            return False
        self.notice = "Spotify embed deleted!"
        await self.fetch_spotify_embeds(token)
        return True

    # ---------- VIP ----------
    def choose_vip_file(self, field_name: str, pending: Optional[PendingFile]) -> None:
        if field_name not in self.vip_files:
            raise ValueError(f"Unknown VIP media field: {field_name}")
        self.vip_files[field_name] = pending

    def edit_vip(self, post: Dict) -> None:
        # there is no update route, this only pre-fills the form for a new upload
        self.vip_title = post.get("title") or ""
        self.vip_description = post.get("description") or ""
        self.vip_files = {field: None for field in VIP_MEDIA_FIELDS}

    async def submit_vip(self, token: str) -> bool:
        try:
            await self.api.upload_vip(self.vip_title, self.vip_description, dict(self.vip_files), token)
        except ApiClientError as e:
            logger.error("❌ There was an error uploading the VIP content: %s", e)
            self.notice = "Uploading the VIP content failed"
            return False
        self.notice = "VIP content uploaded successfully!"
        self.vip_title = ""
        self.vip_description = ""
        self.vip_files = {field: None for field in VIP_MEDIA_FIELDS}
        await self.fetch_vip_posts(token)
        return True

    async def delete_vip(self, content_id: str, token: str) -> bool:
        try:
            await self.api.delete_vip(content_id, token)
        except ApiClientError as e:
            logger.error("❌ There was an error deleting the VIP post: %s", e)
            self.notice = "Deleting the VIP post failed"
            return False
        self.notice = "VIP post deleted!"
        await self.fetch_vip_posts(token)
        return True

    def take_notice(self) -> Optional[str]:
        notice, self.notice = self.notice, None
        return notice


class EditorRegistry:
    """Per-session NewsEditor instances, oldest evicted once `capacity` is reached."""

    def __init__(self, api, codec: Optional[RichTextCodec] = None, capacity: int = 100):
        self.api = api
        self.codec = codec
        self.capacity = capacity
        self._editors: "OrderedDict[str, NewsEditor]" = OrderedDict()

    def get(self, editor_id: str) -> NewsEditor:
        editor = self._editors.get(editor_id)
        if editor is None:
            editor = NewsEditor(self.api, self.codec)
            self._editors[editor_id] = editor
            while len(self._editors) > self.capacity:
                self._editors.popitem(last=False)
        else:
            self._editors.move_to_end(editor_id)
        return editor

    def __len__(self) -> int:
        return len(self._editors)
