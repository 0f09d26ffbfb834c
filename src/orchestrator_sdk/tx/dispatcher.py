"""
Transaction dispatcher.

Runs one submission through the active wallet adapter:
validate fee -> validate messages -> resolve signer -> sign and broadcast.
Every submission is tracked by a small state machine

    IDLE -> SIGNING -> BROADCASTING -> SUCCESS

where IDLE, SIGNING and BROADCASTING may also move to FAILED. A proposal
submitted with auto-vote gets a second, independent tracker for the
follow-up vote. A failed vote never undoes or fails the proposal.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, TypeVar, Union

from orchestrator_sdk.config import ChainConfig
from orchestrator_sdk.errors import TxTimeoutError
from orchestrator_sdk.governance.builder import BuiltProposal, build_submit_proposal_message
from orchestrator_sdk.governance.vote import (
    VoteOption,
    extract_proposal_id,
    format_vote_option,
    generate_auto_vote_message,
)
from orchestrator_sdk.tx.fee import build_fee, estimate_gas, validate_fee, validate_messages
from orchestrator_sdk.tx.memo import create_proposal_memo, create_vote_memo, format_memo, validate_memo_length
from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount
from orchestrator_sdk.wallet.types import WalletAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DispatchState(str, Enum):
    IDLE = "idle"
    SIGNING = "signing"
    BROADCASTING = "broadcasting"
    SUCCESS = "success"
    FAILED = "failed"


_TRANSITIONS: dict[DispatchState, frozenset[DispatchState]] = {
    DispatchState.IDLE: frozenset({DispatchState.SIGNING, DispatchState.FAILED}),
    DispatchState.SIGNING: frozenset({DispatchState.BROADCASTING, DispatchState.FAILED}),
    DispatchState.BROADCASTING: frozenset({DispatchState.SUCCESS, DispatchState.FAILED}),
    DispatchState.SUCCESS: frozenset(),
    DispatchState.FAILED: frozenset(),
}


class SubmissionTracker:
    """State of a single sign-and-broadcast attempt."""

    def __init__(self, label: str = "tx"):
        self.label = label
        self.state = DispatchState.IDLE
        self.history: list[DispatchState] = [DispatchState.IDLE]
        self.error: Optional[BaseException] = None

    def transition(self, new_state: DispatchState):
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid transition for {self.label}: {self.state.value} -> {new_state.value}")
        logger.debug(f"{self.label}: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    def fail(self, error: BaseException):
        self.error = error
        self.transition(DispatchState.FAILED)

    @property
    def done(self) -> bool:
        return self.state in (DispatchState.SUCCESS, DispatchState.FAILED)


@dataclass
class DispatchResult:
    tracker: SubmissionTracker
    signer: WalletAccount
    fee: Fee
    result: BroadcastResult

    @property
    def transaction_hash(self) -> str:
        return self.result.transaction_hash

    @property
    def state(self) -> DispatchState:
        return self.tracker.state


@dataclass
class ProposalSubmission:
    proposal: DispatchResult
    proposal_id: Optional[str] = None
    vote: Optional[DispatchResult] = None
    vote_tracker: Optional[SubmissionTracker] = None
    vote_error: Optional[BaseException] = None

    @property
    def vote_failed(self) -> bool:
        return self.vote_error is not None


class TransactionDispatcher:
    def __init__(
        self,
        adapter: WalletAdapter,
        chain: ChainConfig,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            adapter: Signing backend used for every submission
            chain: Target chain; its gas price prices estimated fees
            endpoint: Node endpoint handed to the adapter, defaults to chain.rest
            timeout: Seconds allowed for each wallet call, None waits indefinitely
        """
        self.adapter = adapter
        self.chain = chain
        self.endpoint = endpoint or chain.rest
        self.timeout = timeout

    async def _call(self, awaitable: Awaitable[T], what: str) -> T:
        if self.timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, self.timeout)
        except asyncio.TimeoutError as e:
            raise TxTimeoutError(f"{self.adapter.get_name()} did not finish {what} within {self.timeout}s") from e

    def estimate_fee(self, messages: Sequence[Any]) -> Fee:
        return build_fee(estimate_gas(messages), self.chain.gas_price)

    async def _run(
        self,
        tracker: SubmissionTracker,
        build_messages: Callable[[WalletAccount], Sequence[Any]],
        fee: Optional[Union[Fee, Mapping[str, Any]]],
        memo: str,
        messages: Optional[Sequence[Any]] = None,
    ) -> DispatchResult:
        try:
            # nothing malformed may reach the wallet
            if fee is not None:
                validate_fee(fee)
                if not isinstance(fee, Fee):
                    fee = Fee.from_dict(fee)
            if messages is not None:
                validate_messages(messages)
            validate_memo_length(memo)

            tracker.transition(DispatchState.SIGNING)
            account = await self._call(self.adapter.connect(self.chain.chain_id), "connect")
            to_send: list[EncodeObject] = validate_messages(list(build_messages(account)))
            if fee is None:
                fee = self.estimate_fee(to_send)
                logger.debug(f"Estimated fee for {len(to_send)} message(s): gas={fee.gas}")

            tracker.transition(DispatchState.BROADCASTING)
            result = await self._call(
                self.adapter.sign_and_broadcast_result(self.endpoint, self.chain.chain_id, to_send, fee, memo),
                "sign and broadcast",
            )
        except Exception as e:
            tracker.fail(e)
            logger.warning(f"{tracker.label} failed: {e}")
            raise

        tracker.transition(DispatchState.SUCCESS)
        logger.info(f"{tracker.label} included: {result.transaction_hash}")
        return DispatchResult(tracker=tracker, signer=account, fee=fee, result=result)

    async def dispatch(
        self,
        messages: Sequence[Any],
        fee: Optional[Union[Fee, Mapping[str, Any]]] = None,
        memo: str = "",
        tracker: Optional[SubmissionTracker] = None,
    ) -> DispatchResult:
        """
        Validate and submit `messages`.

        Args:
            messages: EncodeObjects or {"type_url"/"typeUrl", "value"} mappings
            fee: Fee to pay; estimated from the messages and the chain gas price when omitted
            memo: Transaction memo
            tracker: Tracker to drive, a new one is created when omitted

        Returns:
            DispatchResult with the included transaction

        Raises:
            InvalidFeeStructure, InvalidMessageStructure: Before any wallet call
            WalletError: Classified backend failure, including BroadcastFailure
        """
        tracker = tracker or SubmissionTracker("tx")
        return await self._run(tracker, lambda _account: messages, fee, memo, messages=messages)

    async def submit_proposal(
        self,
        proposal: BuiltProposal,
        fee: Optional[Union[Fee, Mapping[str, Any]]] = None,
        memo: Optional[str] = None,
        auto_vote: bool = False,
    ) -> ProposalSubmission:
        """
        Submit `proposal` from the connected account and optionally vote YES on it.

        The vote runs only when the proposal id can be read from the
        submission's events. Its failure is recorded on the returned
        ProposalSubmission and never raised.

        Raises:
            Same as dispatch(), for the proposal submission only
        """
        if memo is None:
            proposal_type = proposal.messages[0].kind.value if proposal.messages else "text"
            memo = create_proposal_memo(proposal_type, proposal.title)
        memo = format_memo(memo)

        submitted = await self._run(
            SubmissionTracker("proposal"),
            lambda account: [build_submit_proposal_message(proposal, account.address)],
            fee,
            memo,
        )
        submission = ProposalSubmission(proposal=submitted, proposal_id=extract_proposal_id(submitted.result))

        if not auto_vote:
            return submission

        if submission.proposal_id is None:
            logger.warning("Proposal id not found in submission events, skipping auto-vote")
            return submission

        vote_tracker = SubmissionTracker(f"vote on proposal {submission.proposal_id}")
        submission.vote_tracker = vote_tracker
        try:
            submission.vote = await self._run(
                vote_tracker,
                lambda account: [generate_auto_vote_message(submission.proposal_id, account.address)],
                None,
                create_vote_memo(submission.proposal_id, format_vote_option(VoteOption.YES)),
            )
        except Exception as e:
            submission.vote_error = e
            logger.error(f"Auto-vote failed, proposal {submission.proposal_id} remains submitted: {e}")

        return submission
