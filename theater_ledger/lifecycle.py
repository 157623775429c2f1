"""Lifecycle manager: create, analyze and archive scripts on the ledger.

Every mutation is a read-modify-write of whole blobs followed by a full
reload of the collection from the key index, so the in-memory collection is
always a snapshot of the ledger rather than an optimistically patched copy.

Status machine (only the owner may trigger a transition):

    create   -> pending
    pending  -> analyzed   (analyze)
    pending  -> archived   (archive)
    analyzed -> archived   (archive)

Create writes the script blob and then appends its id to the index. The two
writes are not atomic: if the append fails the script exists but is not
listed. Such ids are kept in ``orphaned_ids`` and ``repair_index`` links
them back.

Ownership is checked here, on the client. The ledger accepts any signed
write, so integrators that need real authorization must enforce it in the
ledger contract itself.
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from theater_ledger.blob_store.protocol import BlobStore
from theater_ledger.collaborators import Encryptor, ScriptAnalyzer, SimulatedFheAnalyzer, SimulatedFheEncryptor
from theater_ledger.collection import CollectionView, ScriptCollection
from theater_ledger.exceptions import (
    AnalysisError,
    AuthorizationDeniedError,
    EncryptionError,
    ErrorKind,
    InvalidScriptError,
    InvalidTransitionError,
    OperationInProgressError,
    RemoteUnavailableError,
    ScriptDecodeError,
    ScriptNotFoundError,
    TheaterLedgerError,
    UserRejectedError,
)
from theater_ledger.key_index import KeyIndex
from theater_ledger.logging import get_ledger_logger
from theater_ledger.notifications import Notifier, TransactionState, TransactionStatus, log_notifier
from theater_ledger.retry import RetryPolicy, retry_async
from theater_ledger.scripts import (
    Era,
    Script,
    ScriptId,
    ScriptStatus,
    decode_script,
    encode_script,
    generate_script_id,
    script_key,
)
from theater_ledger.scripts.script import same_account
from theater_ledger.session import WalletSession
from theater_ledger.settings import settings

logger = get_ledger_logger(__name__)

USER_REJECTED_MESSAGE = "Transaction rejected by user"


@dataclass(frozen=True, slots=True)
class _Action:
    name: str
    pending: str
    success: str
    failure_prefix: str


CREATE = _Action("create", "Encrypting script with FHE...", "Script encrypted and stored securely!", "Upload failed: ")
ANALYZE = _Action(
    "analyze",
    "Performing FHE analysis on encrypted script...",
    "FHE analysis completed successfully!",
    "Analysis failed: ",
)
ARCHIVE = _Action("archive", "Archiving script with FHE...", "Script archived securely!", "Archiving failed: ")


class OperationOutcome(BaseModel):
    """Terminal result of a lifecycle operation."""

    model_config = ConfigDict(frozen=True)

    status: TransactionState
    message: str
    script_id: ScriptId | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.status is TransactionState.SUCCESS


class LifecycleManager:
    """Owns the script collection and every mutation of it.

    Args:
        store: Ledger backend.
        session: Current wallet session; mutations require an account.
        encryptor: Turns plaintext into the stored ciphertext token.
        analyzer: Produces themes and character network for a ciphertext.
            Defaults to the simulated analyzer delayed by ``ANALYSIS_DELAY``.
        retry_policy: Applied to ledger writes only. Defaults to the policy built
            from settings (``WRITE_ATTEMPTS``, ``RETRY_BASE_DELAY``, ``RETRY_MAX_DELAY``).
        notifier: Receives pending/success/error notices.
        clock: Seconds since epoch, used for ``created_at``.
        id_generator: Produces new script ids.
    """

    def __init__(
        self,
        store: BlobStore,
        session: WalletSession,
        *,
        encryptor: Encryptor | None = None,
        analyzer: ScriptAnalyzer | None = None,
        retry_policy: RetryPolicy | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], float] = time.time,
        id_generator: Callable[[], ScriptId] = generate_script_id,
    ) -> None:
        self._store = store
        self._session = session
        self._encryptor = encryptor or SimulatedFheEncryptor()
        self._analyzer = analyzer or SimulatedFheAnalyzer(settings.analysis_delay)
        self._retry = retry_async(retry_policy or RetryPolicy.from_settings(settings))
        self._notify = notifier or log_notifier
        self._clock = clock
        self._new_id = id_generator
        self._index = KeyIndex(store)
        self._collection = ScriptCollection()
        self._in_flight: set[str] = set()
        self.orphaned_ids: list[ScriptId] = []

    @property
    def collection(self) -> ScriptCollection:
        return self._collection

    @property
    def index(self) -> KeyIndex:
        return self._index

    def view(
        self,
        search_term: str = "",
        *,
        page_size: int | None = None,
        top_themes: int | None = None,
    ) -> CollectionView:
        """View over the current collection; unset limits come from settings."""
        return CollectionView(
            self._collection,
            search_term,
            page_size if page_size is not None else settings.page_size,
            top_themes if top_themes is not None else settings.top_themes,
        )

    def is_owner(self, owner: str | None) -> bool:
        return same_account(owner, self._session.current_account)

    def can_analyze(self, script: Script) -> bool:
        return self.is_owner(script.owner) and script.status is ScriptStatus.PENDING

    def can_archive(self, script: Script) -> bool:
        return self.is_owner(script.owner) and script.status.can_transition_to(ScriptStatus.ARCHIVED)

    # --- Reading ---

    async def reload(self) -> ScriptCollection:
        """Rebuild the collection from the key index.

        Missing or undecodable script blobs are logged and skipped. If the
        ledger is unavailable the previous collection is kept and an error
        notice is emitted.
        """
        try:
            scripts = await self._fetch_scripts()
        except RemoteUnavailableError as e:
            logger.error(f"Reload failed, keeping collection v{self._collection.version}: {e}")
            self._notify(TransactionStatus.failure(f"Loading scripts failed: {e}", e.kind))
            return self._collection

        self._collection = self._collection.next_version(scripts)
        logger.info(f"Loaded {len(self._collection)} scripts (collection v{self._collection.version})")
        return self._collection

    async def _fetch_scripts(self) -> list[Script]:
        if not await self._store.check_available():
            raise RemoteUnavailableError("Ledger is not available")

        scripts: list[Script] = []
        for script_id in await self._index.load():
            data = await self._store.read(script_key(script_id))
            if not data:
                logger.warning(f"Script {script_id} is listed in the index but its blob is missing")
                continue
            try:
                scripts.append(decode_script(script_id, data))
            except ScriptDecodeError as e:
                logger.warning(f"Skipping script {script_id}: {e}")
        return scripts

    async def _read_script(self, script_id: str) -> Script:
        data = await self._store.read(script_key(script_id))
        if not data:
            raise ScriptNotFoundError("Script not found")
        return decode_script(script_id, data)

    # --- Mutations ---

    async def create(self, title: str, content: str, era: Era | str = Era.ANCIENT) -> OperationOutcome:
        """Encrypt and upload a new script in ``pending`` status."""

        async def body() -> ScriptId:
            owner = self._session.require_account()
            script = self._new_script(title, content, era, owner)
            await self._retry(self._store.write)(script_key(script.id), encode_script(script))
            try:
                await self._retry(self._index.append)(script.id)
            except TheaterLedgerError:
                self.orphaned_ids.append(script.id)
                logger.error(f"Script {script.id} was written but not indexed; recorded for repair")
                raise
            logger.info(f"Created script {script.id} ({script.title!r}) for {owner}")
            return script.id

        return await self._run(CREATE, "create", body)

    async def analyze(self, script_id: str) -> OperationOutcome:
        """Run analysis on a pending script owned by the current account."""

        async def body() -> ScriptId:
            script = await self._authorized_script(script_id, ScriptStatus.ANALYZED)
            try:
                result = await self._analyzer.analyze(script.content)
            except TheaterLedgerError:
                raise
            except Exception as e:
                logger.exception(f"Analyzer failed for script {script.id}")
                raise AnalysisError(str(e) or type(e).__name__) from e
            if not result.themes:
                raise AnalysisError("Analysis returned no themes")
            updated = script.with_analysis(result.themes, result.character_network)
            await self._retry(self._store.write)(script_key(script.id), encode_script(updated))
            logger.info(f"Analyzed script {script.id}: {', '.join(updated.themes)}")
            return script.id

        return await self._run(ANALYZE, script_id, body)

    async def archive(self, script_id: str) -> OperationOutcome:
        """Archive a pending or analyzed script owned by the current account."""

        async def body() -> ScriptId:
            script = await self._authorized_script(script_id, ScriptStatus.ARCHIVED)
            await self._retry(self._store.write)(script_key(script.id), encode_script(script.archived()))
            logger.info(f"Archived script {script.id}")
            return script.id

        return await self._run(ARCHIVE, script_id, body)

    async def repair_index(self, ids: Iterable[str] = ()) -> list[ScriptId]:
        """Link scripts whose blobs exist but are missing from the index.

        Candidates are the ids recorded in ``orphaned_ids`` plus ``ids``.
        Candidates without a decodable blob are skipped. Reloads the
        collection when anything was repaired.

        Raises:
            NotConnectedError: If no wallet session is active.
            RemoteUnavailableError: If the ledger cannot be read or written.
        """
        self._session.require_account()
        candidates = list(dict.fromkeys([*self.orphaned_ids, *ids]))
        indexed = set(await self._index.load())

        repaired: list[ScriptId] = []
        for candidate in candidates:
            script_id = ScriptId(candidate)
            if script_id not in indexed:
                try:
                    await self._read_script(script_id)
                except (ScriptNotFoundError, ScriptDecodeError) as e:
                    logger.warning(f"Not repairing {script_id}: {e}")
                    self._forget_orphan(script_id)
                    continue
                await self._retry(self._index.append)(script_id)
                indexed.add(script_id)
                repaired.append(script_id)
                logger.info(f"Re-linked orphaned script {script_id}")
            self._forget_orphan(script_id)

        if repaired:
            await self.reload()
        return repaired

    # --- Helpers ---

    def _new_script(self, title: str, content: str, era: Era | str, owner: str) -> Script:
        if not title or not title.strip() or not content or not content.strip():
            raise InvalidScriptError("Please fill required fields")
        try:
            era = Era(era)
        except ValueError as e:
            raise InvalidScriptError(f"Unknown era {era!r}") from e
        return Script(
            id=self._new_id(),
            title=title.strip(),
            content=self._encrypt(content),
            created_at=int(self._clock()),
            owner=owner,
            era=era.value,
        )

    def _encrypt(self, plaintext: str) -> str:
        try:
            token = self._encryptor.encrypt(plaintext)
        except TheaterLedgerError:
            raise
        except Exception as e:
            logger.exception("Encryptor failed")
            raise EncryptionError(str(e) or type(e).__name__) from e
        if not token:
            raise EncryptionError("Encryptor returned an empty token")
        return token

    async def _authorized_script(self, script_id: str, target: ScriptStatus) -> Script:
        """Load the stored script and check session, ownership and transition."""
        account = self._session.require_account()
        script = await self._read_script(script_id)
        if not script.is_owned_by(account):
            raise AuthorizationDeniedError(f"Only the owner can modify script {script_id}")
        if not script.status.can_transition_to(target):
            raise InvalidTransitionError(f"Cannot move script from {script.status} to {target}")
        return script

    def _forget_orphan(self, script_id: ScriptId) -> None:
        if script_id in self.orphaned_ids:
            self.orphaned_ids.remove(script_id)

    @asynccontextmanager
    async def _guard(self, key: str) -> AsyncIterator[None]:
        if key in self._in_flight:
            raise OperationInProgressError("Operation already in progress")
        self._in_flight.add(key)
        try:
            yield
        finally:
            self._in_flight.discard(key)

    async def _run(self, action: _Action, key: str, body: Callable[[], Awaitable[ScriptId]]) -> OperationOutcome:
        """Run one mutation and turn its result into notices and an outcome."""
        script_id = None if action is CREATE else ScriptId(key)
        try:
            async with self._guard(key):
                self._session.require_account()
                self._notify(TransactionStatus.pending(action.pending))
                script_id = await body()
                self._notify(TransactionStatus.success(action.success))
                await self.reload()
        except TheaterLedgerError as e:
            message = USER_REJECTED_MESSAGE if isinstance(e, UserRejectedError) else f"{action.failure_prefix}{e}"
            logger.warning(f"{action.name} failed ({e.kind}): {e}")
            self._notify(TransactionStatus.failure(message, e.kind))
            return OperationOutcome(status=TransactionState.ERROR, message=message, script_id=script_id, error=e.kind)
        return OperationOutcome(status=TransactionState.SUCCESS, message=action.success, script_id=script_id)
