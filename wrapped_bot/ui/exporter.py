"""
Share exporter for the Wrapped viewer.

Captures the card currently on screen as a PNG and hands it to the best
share mechanism available:

1. A share surface that accepts files gets the image plus the text and link.
2. A share surface without file support gets the text and link only.
3. Without a share surface the PNG is downloaded and the link copied,
   where a failed copy is only logged.

The sequencer is paused and flagged as sharing for the whole operation and is
always resumed afterwards, whatever the outcome.
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Protocol, Union

from wrapped_bot.constants import ShareConstants, ViewerConstants
from wrapped_bot.services.dataset import slugify
from wrapped_bot.ui.sequencer import CardSequencer
from wrapped_bot.utils.exceptions import CaptureError, ShareHandoffError, WrappedException
from wrapped_bot.utils.logger import setup_logger

logger = setup_logger(__name__)


class ShareMethod(str, Enum):
    """How an artifact reached the user."""
    SHARED_WITH_FILE = "shared_with_file"
    SHARED_TEXT_ONLY = "shared_text_only"
    DOWNLOADED = "downloaded"


@dataclass(frozen=True)
class ShareArtifact:
    """A successfully exported card."""
    filename: str
    image: bytes
    text: str
    url: str
    method: ShareMethod


@dataclass(frozen=True)
class ShareFailure:
    """An export that stopped at ``stage`` ("capture" or "handoff")."""
    stage: str
    reason: str
    user_message: str = "❌ Couldn't share the card. Please try again."


class ShareSurface(Protocol):
    """Native share target, e.g. the channel the viewer lives in."""

    can_share_files: bool

    async def share(self, text: str, url: str, filename: Optional[str] = None,
                    image: Optional[bytes] = None) -> None:
        ...


class Downloader(Protocol):
    async def download(self, filename: str, image: bytes) -> None:
        ...


class LinkCopier(Protocol):
    async def copy_link(self, url: str) -> None:
        ...


def parse_card_element_id(card_element_id: str, card_count: int) -> int:
    """Index of the card named by ``card-<index>``."""
    prefix = ViewerConstants.CARD_ELEMENT_PREFIX
    if not card_element_id.startswith(prefix):
        raise CaptureError(card_element_id, "not a card element")
    try:
        index = int(card_element_id[len(prefix):])
    except ValueError:
        raise CaptureError(card_element_id, "not a card element")
    if not 0 <= index < card_count:
        raise CaptureError(card_element_id, "no such card")
    return index


class ShareExporter:
    """Exports the sequencer's current card and hands it off."""

    def __init__(
        self,
        sequencer: CardSequencer,
        capture: Callable[[int], bytes],
        share_text: str,
        share_url: Callable[[int], str],
        filename: Callable[[int], str],
        share_surface: Optional[ShareSurface] = None,
        downloader: Optional[Downloader] = None,
        link_copier: Optional[LinkCopier] = None,
    ):
        """
        Initialize the exporter.

        Args:
            sequencer: Viewer state machine; paused for the duration of an export
            capture: Blocking renderer from card index to PNG bytes, run in a worker thread
            share_text: Text payload sent with every share
            share_url: Link to the card at a given index
            filename: Image filename for the card at a given index
            share_surface: Preferred target, or None when there is none
            downloader: Fallback delivery of the raw image
            link_copier: Fallback delivery of the link
        """
        self.sequencer = sequencer
        self.capture = capture
        self.share_text = share_text
        self.share_url = share_url
        self.filename = filename
        self.share_surface = share_surface
        self.downloader = downloader
        self.link_copier = link_copier

    async def export_current_card(self, card_element_id: str) -> Union[ShareArtifact, ShareFailure]:
        # Only one export per viewer; the running one owns begin/end_share.
        if self.sequencer.is_sharing:
            logger.info(f"Rejected {card_element_id}: a share is already in progress")
            return ShareFailure(
                stage="capture",
                reason="share already in progress",
                user_message="⏳ This card is already being shared.",
            )

        self.sequencer.begin_share()
        stage = "capture"
        try:
            index = parse_card_element_id(card_element_id, self.sequencer.card_count)
            if index != self.sequencer.current_index:
                raise CaptureError(card_element_id, "card is not on screen")

            image = await asyncio.to_thread(self.capture, index)
            if not image:
                raise CaptureError(card_element_id, "renderer produced no image")

            stage = "handoff"
            artifact = ShareArtifact(
                filename=self.filename(index),
                image=image,
                text=self.share_text,
                url=self.share_url(index),
                method=ShareMethod.DOWNLOADED,
            )
            method = await self._hand_off(artifact)
            logger.info(f"Exported {card_element_id} via {method.value}")
            return replace(artifact, method=method)

        except WrappedException as e:
            logger.warning(f"Share {stage} failed: {e}")
            return ShareFailure(stage=stage, reason=str(e), user_message=e.user_message)
        except Exception as e:
            logger.error(f"Unexpected share {stage} error: {e}", exc_info=True)
            return ShareFailure(stage=stage, reason=str(e))
        finally:
            self.sequencer.end_share()

    async def _hand_off(self, artifact: ShareArtifact) -> ShareMethod:
        surface = self.share_surface
        if surface is not None:
            if surface.can_share_files:
                await surface.share(artifact.text, artifact.url, artifact.filename, artifact.image)
                return ShareMethod.SHARED_WITH_FILE
            await surface.share(artifact.text, artifact.url)
            return ShareMethod.SHARED_TEXT_ONLY

        if self.downloader is None:
            raise ShareHandoffError("no share surface or download target")
        await self.downloader.download(artifact.filename, artifact.image)

        if self.link_copier is not None:
            try:
                await self.link_copier.copy_link(artifact.url)
            except Exception as e:
                logger.warning(f"Could not copy share link: {e}")
        return ShareMethod.DOWNLOADED


def share_filename(member_name: str, index: int) -> str:
    """``<slug>-wrapped-<n>.png`` for the 0-based card index."""
    extension = ShareConstants.IMAGE_FORMAT.lower()
    return f"{slugify(member_name) or 'member'}-wrapped-{index + 1}.{extension}"
