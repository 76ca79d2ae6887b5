"""
Deferred listing verification - promotes pending listings to active without
blocking the caller that created them.
"""
import logging
import threading
from concurrent.futures import Future, wait
from enum import Enum
from typing import Callable, Optional

from .builder import AnyListing


logger = logging.getLogger(__name__)


Verifier = Callable[[AnyListing], bool]
Fetch = Callable[[str], Optional[AnyListing]]
Promote = Callable[[str], bool]


class VerificationOutcome(str, Enum):
    VERIFIED = "verified"
    REJECTED = "rejected"  # verifier said no, listing stays pending
    MISSING = "missing"  # listing deleted before the check ran
    SKIPPED = "skipped"  # listing left pending through another path


def always_verify(listing: AnyListing) -> bool:
    """Default verifier: accepts every listing."""
    return True


class VerificationWorkflow:
    """
    Runs one verification per scheduled listing on a timer thread.

    The verifier is a plain callable so real checks (documents, licences)
    can be plugged in. Rejections and verifier errors leave the listing
    pending; nothing is retried automatically.
    """

    def __init__(self, verifier: Optional[Verifier] = None, delay: float = 1.0):
        self.verifier = verifier or always_verify
        self.delay = delay

        self._lock = threading.Lock()
        self._in_flight: dict[str, tuple[threading.Timer, Future]] = {}
        self._closed = False

    def schedule(self, listing_id: str, fetch: Fetch, promote: Promote) -> Future:
        """
        Schedule verification for a listing.

        Args:
            listing_id: Listing to verify
            fetch: Reads the current listing, None if it was deleted
            promote: Marks the listing verified, False if it could not

        Returns:
            Future resolving to a VerificationOutcome
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("verification workflow is closed")

            existing = self._in_flight.get(listing_id)
            if existing is not None:
                return existing[1]

            future: Future = Future()
            timer = threading.Timer(
                self.delay, self._run, args=(listing_id, fetch, promote, future)
            )
            timer.daemon = True
            self._in_flight[listing_id] = (timer, future)

        logger.debug(f"Verification scheduled for {listing_id} in {self.delay}s")
        timer.start()
        return future

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def in_flight(self) -> int:
        with self._lock:
            return len(self._in_flight)

    def wait_all(self, timeout: Optional[float] = None) -> bool:
        """Block until every in-flight verification is done. Returns False on timeout."""
        with self._lock:
            futures = [future for _, future in self._in_flight.values()]
        if not futures:
            return True
        _, not_done = wait(futures, timeout=timeout)
        return not not_done

    def close(self) -> None:
        """Stop accepting work and cancel timers that have not fired yet."""
        with self._lock:
            self._closed = True
            pending = list(self._in_flight.items())
            self._in_flight.clear()

        for listing_id, (timer, future) in pending:
            timer.cancel()
            if future.cancel():
                logger.info(f"Verification cancelled for {listing_id}")

    def _run(self, listing_id: str, fetch: Fetch, promote: Promote, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            outcome = self._verify(listing_id, fetch, promote)
        except Exception as e:
            logger.exception(f"Verifier failed for {listing_id}, listing stays pending")
            self._release(listing_id, future)
            future.set_exception(e)
        else:
            self._release(listing_id, future)
            future.set_result(outcome)

    def _release(self, listing_id: str, future: Future) -> None:
        with self._lock:
            current = self._in_flight.get(listing_id)
            if current is not None and current[1] is future:
                del self._in_flight[listing_id]

    def _verify(self, listing_id: str, fetch: Fetch, promote: Promote) -> VerificationOutcome:
        listing = fetch(listing_id)
        if listing is None:
            logger.info(f"Listing {listing_id} no longer exists, skipping verification")
            return VerificationOutcome.MISSING

        if listing.status != "pending":
            return VerificationOutcome.SKIPPED

        if not self.verifier(listing):
            logger.warning(f"Verification rejected for {listing_id}, listing stays pending")
            return VerificationOutcome.REJECTED

        if not promote(listing_id):
            # Deleted or moved on while the verifier ran
            still_there = fetch(listing_id) is not None
            return VerificationOutcome.SKIPPED if still_there else VerificationOutcome.MISSING

        logger.info(f"Listing {listing_id} verified")
        return VerificationOutcome.VERIFIED
