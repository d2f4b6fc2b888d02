import logging
from dataclasses import dataclass
from typing import Optional, Union

from spider.Table import Table

logger = logging.getLogger(__name__)


class UndoMismatchError(RuntimeError):
    """The store no longer matches what the history recorded."""


@dataclass(frozen=True, slots=True)
class Flip:
    column: int
    card: int


@dataclass(frozen=True, slots=True)
class ClearedRun:
    column: int
    # bottom first, King down to Ace
    cards: tuple[int, ...]
    flip: Optional[Flip] = None


@dataclass(frozen=True, slots=True)
class MoveAction:
    fromColumn: int
    toColumn: int
    fromIndex: int
    cards: tuple[int, ...]
    flipped: tuple[Flip, ...] = ()
    clearedRun: Optional[ClearedRun] = None


@dataclass(frozen=True, slots=True)
class DealAction:
    # (column, card) in dealing order
    dealt: tuple[tuple[int, int], ...]
    clearedRuns: tuple[ClearedRun, ...] = ()


GameAction = Union[MoveAction, DealAction]


class HistoryRecorder:
    """
    Stack of performed actions. Each record holds everything needed to put
    the table back: effects are reversed newest first, so a run cleared by a
    placement is restored before the placement itself is taken back.
    """

    def __init__(self):
        self.lst: list[GameAction] = []

    def __len__(self):
        return len(self.lst)

    @property
    def canUndo(self):
        return len(self.lst) > 0

    def peek(self) -> Optional[GameAction]:
        if not self.lst:
            return None
        return self.lst[-1]

    def clear(self):
        self.lst = []

    def recordMove(self, action: MoveAction):
        self.lst.append(action)

    def recordDeal(self, action: DealAction):
        self.lst.append(action)

    def undo(self, table: Table) -> Optional[GameAction]:
        if not self.lst:
            return None
        action = self.lst.pop()
        if isinstance(action, MoveAction):
            self.__undoMove(table, action)
        elif isinstance(action, DealAction):
            self.__undoDeal(table, action)
        else:
            raise UndoMismatchError(f"unknown history record {action!r}")
        logger.debug("undid %s", type(action).__name__)
        return action

    @staticmethod
    def __undoClearedRun(table: Table, run: ClearedRun):
        last = table.foundations[-1] if table.foundations else None
        if last != run.cards:
            raise UndoMismatchError(f"foundation top {last} does not match cleared run from column {run.column}")
        table.popFoundation()
        if run.flip is not None:
            table.setFaceUp(run.flip.card, False)
        table.placeCards(run.column, run.cards)

    @staticmethod
    def __undoMove(table: Table, action: MoveAction):
        if action.clearedRun is not None:
            HistoryRecorder.__undoClearedRun(table, action.clearedRun)

        dest = table.column(action.toColumn)
        start = len(dest) - len(action.cards)
        if start < 0 or tuple(dest[start:]) != action.cards:
            raise UndoMismatchError(
                f"column {action.toColumn} does not end with the moved cards {action.cards}"
            )
        moved = table.takeCards(action.toColumn, start)
        table.insertCards(action.fromColumn, action.fromIndex, moved)

        for flip in reversed(action.flipped):
            table.setFaceUp(flip.card, False)

    @staticmethod
    def __undoDeal(table: Table, action: DealAction):
        for run in reversed(action.clearedRuns):
            HistoryRecorder.__undoClearedRun(table, run)

        for column, cardId in reversed(action.dealt):
            top = table.top(column)
            if top != cardId:
                raise UndoMismatchError(f"expected dealt card {cardId} on column {column}, found {top}")
            table.column(column).pop()
            table.setFaceUp(cardId, False)
            table.pushStock(cardId)
