"""Duplicate detection and resolution during uploads."""

import logging
from collections import deque
from typing import Iterable, Optional, Protocol

import click

from .formats import classify
from .models import ConflictDecision, LocalFile, RemoteDocument
from .output import OutputFormatter
from .store import DocumentStore

logger = logging.getLogger(__name__)

# Prompt answer -> (decision, whether it applies to the rest of the run)
ANSWERS: dict[str, tuple[ConflictDecision, bool]] = {
    "a": (ConflictDecision.ADD, False),
    "s": (ConflictDecision.SKIP, False),
    "r": (ConflictDecision.REPLACE, False),
    "aa": (ConflictDecision.ADD, True),
    "sa": (ConflictDecision.SKIP, True),
    "ra": (ConflictDecision.REPLACE, True),
}

PROMPT_TEXT = (
    " - add (a) / skip (s) / replace (r) / add all (aa) / skip all (sa) / "
    "replace all (ra)"
)


class ConflictPolicy:
    """Session-wide answers that stop further duplicate prompts.

    Each flag can only be switched on. A fresh policy is created for every
    upload run and shared by all folders visited during that run.
    """

    def __init__(
        self, add_all: bool = False, skip_all: bool = False, replace_all: bool = False
    ):
        self._add_all = add_all
        self._skip_all = skip_all
        self._replace_all = replace_all

    @property
    def add_all(self) -> bool:
        return self._add_all

    @property
    def skip_all(self) -> bool:
        return self._skip_all

    @property
    def replace_all(self) -> bool:
        return self._replace_all

    def apply_to_all(self, decision: ConflictDecision) -> None:
        """Make ``decision`` the answer for every later duplicate."""
        if decision is ConflictDecision.ADD:
            self._add_all = True
        elif decision is ConflictDecision.SKIP:
            self._skip_all = True
        else:
            self._replace_all = True

    def sticky_decision(self) -> Optional[ConflictDecision]:
        """Decision implied by the flags, or None if the user must be asked."""
        if self._add_all:
            return ConflictDecision.ADD
        if self._skip_all:
            return ConflictDecision.SKIP
        if self._replace_all:
            return ConflictDecision.REPLACE
        return None

    def __repr__(self) -> str:
        return (
            f"ConflictPolicy(add_all={self._add_all}, skip_all={self._skip_all}, "
            f"replace_all={self._replace_all})"
        )


class DecisionProvider(Protocol):
    """Supplies an answer (one of ANSWERS) for a duplicate."""

    def choose(self, file: LocalFile, existing: RemoteDocument) -> str:
        ...


class ConsolePrompt:
    """Asks the user on the console, repeating the question until the answer
    is valid."""

    def choose(self, file: LocalFile, existing: RemoteDocument) -> str:
        return click.prompt(
            PROMPT_TEXT,
            type=click.Choice(list(ANSWERS)),
            show_choices=False,
            prompt_suffix=": ",
        )


class PresetAnswers:
    """Answers taken from a pre-supplied list, for unattended runs.

    Invalid answers are skipped the same way the console prompt would ask
    again. Once the list is used up ``default`` is returned.
    """

    def __init__(self, answers: Iterable[str] = (), default: Optional[str] = None):
        if default is not None and default not in ANSWERS:
            raise ValueError(f"Invalid default answer: {default!r}")
        self._answers = deque(answers)
        self.default = default
        self.asked: list[str] = []

    def choose(self, file: LocalFile, existing: RemoteDocument) -> str:
        self.asked.append(file.name)
        while self._answers:
            answer = self._answers.popleft()
            if answer in ANSWERS:
                return answer
        if self.default is None:
            raise LookupError(f"No answer left for duplicate '{file.name}'")
        return self.default


class ConflictResolver:
    """Decides what happens to a local file that already exists remotely."""

    def __init__(
        self,
        store: DocumentStore,
        out: OutputFormatter,
        policy: Optional[ConflictPolicy] = None,
        provider: Optional[DecisionProvider] = None,
    ):
        """Initialize the resolver.

        Args:
            store: Remote document store (used to trash replaced documents)
            out: Output formatter
            policy: Sticky answers shared across the run
            provider: Source of answers when no sticky answer applies
        """
        self.store = store
        self.out = out
        self.policy = policy or ConflictPolicy()
        self.provider = provider or ConsolePrompt()

    @staticmethod
    def find_duplicate(
        file: LocalFile, remote_docs: list[RemoteDocument]
    ) -> Optional[RemoteDocument]:
        """Find a remote document with the same title and document type."""
        file_type = classify(file)
        for doc in remote_docs:
            if doc.title == file.name and doc.type == file_type:
                return doc
        return None

    def resolve(
        self, file: LocalFile, remote_docs: list[RemoteDocument]
    ) -> ConflictDecision:
        """Decide whether to add, skip or replace ``file``.

        On REPLACE the existing document is moved to the trash before this
        method returns, so the following upload creates a new document.

        Args:
            file: Local file about to be uploaded
            remote_docs: Documents currently in the target folder

        Returns:
            The decision for this file
        """
        existing = self.find_duplicate(file, remote_docs)
        if existing is None:
            return ConflictDecision.ADD

        decision = self.policy.sticky_decision()
        if decision is None:
            self.out.warning(
                " - A document with the same name and type already exists"
            )
            answer = self.provider.choose(file, existing)
            decision, apply_to_all = ANSWERS[answer]
            if apply_to_all:
                self.policy.apply_to_all(decision)

        if decision is ConflictDecision.REPLACE:
            self._trash(existing)
        return decision

    def _trash(self, document: RemoteDocument) -> None:
        try:
            self.store.delete_document(document)
            logger.debug(f"Moved '{document.title}' (id={document.id}) to trash")
        except Exception as e:
            self.out.warning(f" - Could not remove the existing document: {e}")
