import logging
import random
from dataclasses import dataclass
from typing import Optional

from spider import Rules
from spider.History import DealAction, HistoryRecorder, MoveAction
from spider.Interface import Interface
from spider.Table import COPIES, SUIT_COUNT, Table, buildDeck, shuffleCards

logger = logging.getLogger(__name__)


class GameConfig:
    def __init__(self, seed=None):
        self.suits = SUIT_COUNT
        self.copies = COPIES
        self.stackCount = 10
        self.dealSize = 10
        self.tallColumns = 4
        self.tallHeight = 6
        self.shortHeight = 5
        self.runsToWin = 8
        self.seed = seed

    def columnHeight(self, idx):
        if idx < self.tallColumns:
            return self.tallHeight
        return self.shortHeight

    def rng(self) -> random.Random:
        return random.Random(self.seed)


@dataclass(frozen=True, slots=True)
class Selection:
    column: int
    index: int


class Core:
    """
    The game controller: checks a request, mutates the table, clears any
    finished run and logs the composite action.

    perform*** / select / undo : called by the player, return False when rejected
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self, undoEnabled=True):
        self.interface: Interface = Interface()
        self.config: GameConfig = Core.DEFAULT_CONFIG
        self.table: Table = Table([], self.config.stackCount)
        self.history = HistoryRecorder()
        self.selection: Optional[Selection] = None
        self.undoEnabled = undoEnabled
        self.gameEnded = False

    def registerInterface(self, interface: Interface):
        self.interface = interface
        interface.core = self

    def newGame(self, gameConfig: GameConfig = None):
        config = gameConfig if gameConfig is not None else self.config
        self.config = config
        deck = buildDeck(config.copies, config.suits)
        table = Table(deck, config.stackCount)
        table.stock = [card.id for card in deck]
        shuffleCards(table.stock, config.rng())

        for col in range(config.stackCount):
            height = config.columnHeight(col)
            for i in range(height):
                cardId = table.popStock()
                table.setFaceUp(cardId, i == height - 1)
                table.column(col).append(cardId)

        self.table = table
        self.history.clear()
        self.selection = None
        self.gameEnded = False
        logger.debug("new game seed=%s stock=%d", config.seed, len(table.stock))
        self.interface.onStart()

    def loadTable(self, table: Table):
        """Continue from an arranged position with an empty history."""
        self.table = table
        self.history.clear()
        self.selection = None
        self.gameEnded = False
        self.interface.onStart()

    # read model

    @property
    def stockCount(self):
        return len(self.table.stock)

    @property
    def dealsRemaining(self):
        return len(self.table.stock) // self.config.dealSize

    @property
    def foundationCount(self):
        return len(self.table.foundations)

    @property
    def isComplete(self):
        return len(self.table.foundations) >= self.config.runsToWin

    @property
    def canUndo(self):
        return self.undoEnabled and self.history.canUndo

    def setUndoEnabled(self, enabled: bool):
        self.undoEnabled = bool(enabled)
        self.interface.notifyRedraw()

    def validTargets(self):
        if self.selection is None:
            return ()
        return Rules.validTargets(self.table, self.selection.column, self.selection.index)

    def existValidMove(self):
        return Rules.existValidMove(self.table)

    def checkWin(self):
        if not self.isComplete:
            return False
        self.gameEnded = True
        self.interface.onWin()
        return True

    # player requests

    def select(self, column: int, index: int) -> bool:
        table = self.table
        if not table.isValidColumn(column):
            return False
        stack = table.column(column)
        if index < 0 or index >= len(stack) or not table.isFaceUp(stack[index]):
            return False
        if self.selection == Selection(column, index):
            self.deselect()
            return False
        if not Rules.isMovableStack(table, column, index):
            return False
        self.selection = Selection(column, index)
        self.interface.onSelect(self.selection)
        return True

    def deselect(self):
        if self.selection is None:
            return
        self.selection = None
        self.interface.onSelect(None)

    def moveSelection(self, toColumn: int) -> bool:
        if self.selection is None:
            return False
        return self.performMove(self.selection.column, self.selection.index, toColumn)

    def performMove(self, fromColumn: int, fromIndex: int, toColumn: int) -> bool:
        table = self.table
        if fromColumn == toColumn:
            self.deselect()
            return False
        if not Rules.isMovableStack(table, fromColumn, fromIndex):
            self.deselect()
            return False
        movingTop = table.column(fromColumn)[fromIndex]
        if not Rules.isValidDestination(table, movingTop, toColumn):
            self.deselect()
            return False

        cards = table.takeCards(fromColumn, fromIndex)
        table.placeCards(toColumn, cards)
        flip = Rules.revealTop(table, fromColumn)
        cleared = Rules.tryCompleteRun(table, toColumn)

        action = MoveAction(
            fromColumn=fromColumn,
            toColumn=toColumn,
            fromIndex=fromIndex,
            cards=tuple(cards),
            flipped=(flip,) if flip is not None else (),
            clearedRun=cleared,
        )
        self.history.recordMove(action)
        self.selection = None
        self.interface.onEvent(action)
        self.checkWin()
        return True

    def canDeal(self) -> bool:
        table = self.table
        if len(table.stock) < self.config.dealSize:
            return False
        return all(len(column) > 0 for column in table.columns)

    def performDeal(self) -> bool:
        table = self.table
        if not self.canDeal():
            logger.debug("deal rejected: stock=%d empty columns=%d",
                         len(table.stock), sum(1 for c in table.columns if len(c) == 0))
            return False

        dealt = []
        for col in range(table.stackCount):
            cardId = table.popStock()
            table.setFaceUp(cardId, True)
            table.column(col).append(cardId)
            dealt.append((col, cardId))

        clearedRuns = []
        for col in range(table.stackCount):
            cleared = Rules.tryCompleteRun(table, col)
            if cleared is not None:
                clearedRuns.append(cleared)

        action = DealAction(dealt=tuple(dealt), clearedRuns=tuple(clearedRuns))
        self.history.recordDeal(action)
        self.selection = None
        self.interface.onEvent(action)
        self.checkWin()
        return True

    def undo(self) -> bool:
        if not self.undoEnabled:
            return False
        action = self.history.undo(self.table)
        if action is None:
            return False
        self.selection = None
        self.gameEnded = self.isComplete
        self.interface.onUndoEvent(action)
        return True
