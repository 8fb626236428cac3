"""Autofill dispatcher — one fill attempt per request.

Flow for a single request::

    load profile -> (decrypt) -> detect portal -> portal strategy
                                               \\-> generic strategy

The dispatcher is the only error boundary in the fill path: any failure
along the way is logged and swallowed, and the caller sees ``None`` just
as it would when there was nothing to fill.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jobfill.crypto import decrypt_json, derive_key
from jobfill.filler.generic import GenericStrategy
from jobfill.matching.options import OptionMatcher
from jobfill.models.profile import Profile, is_encrypted
from jobfill.portals.detector import PortalId, detect_portal
from jobfill.portals.registry import StrategyRegistry, build_default_registry

if TYPE_CHECKING:
    from jobfill.dom.document import FormDocument
    from jobfill.store.profile_store import ProfileStore

logger = logging.getLogger(__name__)

AUTOFILL_REQUEST = "AUTOFILL_REQUEST"

KeyDeriver = Callable[[str], bytes]
Decryptor = Callable[[Mapping[str, Any], bytes], Any]


class AutofillRequest(BaseModel):
    """Upstream trigger message."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["AUTOFILL_REQUEST"]
    passphrase: str | None = None


class FillResult(BaseModel):
    """What one completed fill did."""

    portal: PortalId
    strategy: str
    filled: list[str] = Field(default_factory=list)


class AutofillDispatcher:
    """Route a fill request to the right strategy for the page.

    Args:
        profile_store: Source of the stored profile payload.
        matcher: Option matcher shared by every strategy.
        registry: Portal strategies; defaults to the built-in four.
        generic: Fallback strategy for unknown portals.
        key_deriver: ``passphrase -> key`` function.
        decryptor: ``(envelope, key) -> profile dict`` function.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        *,
        matcher: OptionMatcher | None = None,
        registry: StrategyRegistry | None = None,
        generic: GenericStrategy | None = None,
        key_deriver: KeyDeriver = derive_key,
        decryptor: Decryptor = decrypt_json,
    ) -> None:
        self.profile_store = profile_store
        self.matcher = matcher or OptionMatcher.from_settings()
        self.registry = registry or build_default_registry(self.matcher)
        self.generic = generic or GenericStrategy(self.matcher)
        self._derive_key = key_deriver
        self._decrypt = decryptor

    def handle_message(self, message: object, *, hostname: str, document: FormDocument) -> FillResult | None:
        """Run one fill if *message* is an autofill request; ignore anything else."""
        if not isinstance(message, Mapping) or message.get("type") != AUTOFILL_REQUEST:
            logger.debug("Ignoring message that is not an autofill request")
            return None
        try:
            request = AutofillRequest.model_validate(message)
        except ValidationError:
            logger.debug("Ignoring malformed autofill request")
            return None
        return self.fill(document, hostname, request.passphrase or "")

    def fill(self, document: FormDocument, hostname: str, passphrase: str = "") -> FillResult | None:
        """Fill *document* from the stored profile.

        Returns:
            A ``FillResult`` when a strategy ran, else ``None`` (no profile,
            missing passphrase, or a swallowed failure).
        """
        try:
            return self._fill(document, hostname, passphrase)
        except Exception as exc:
            logger.warning("Autofill aborted: %s: %s", type(exc).__name__, exc)
            return None

    def _fill(self, document: FormDocument, hostname: str, passphrase: str) -> FillResult | None:
        payload = self.profile_store.load()
        if payload is None:
            logger.info("No stored profile; nothing to fill")
            return None

        if is_encrypted(payload):
            if not passphrase:
                logger.info("Stored profile is encrypted and no passphrase was given; skipping")
                return None
            payload = self._decrypt(payload, self._derive_key(passphrase))

        profile = Profile.model_validate(payload)

        portal = detect_portal(hostname, document)
        logger.info("Detected portal %s for host %s", portal.value, hostname)

        strategy = self.registry.get(portal)
        if strategy is not None:
            mapping = strategy.locate(document)
            if any(control is not None for control in mapping.values()):
                logger.info("Using %s strategy", strategy.name)
                filled = strategy.apply(document, profile, mapping)
                return FillResult(portal=portal, strategy=strategy.name, filled=filled)
            logger.debug("%s strategy located no fields; falling back to generic", strategy.name)

        logger.info("Using generic strategy")
        filled = self.generic.fill(document, profile)
        return FillResult(portal=portal, strategy=self.generic.name, filled=filled)
