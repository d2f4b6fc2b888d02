"""
Move legality and run completion.

A stack may only be picked up when it is a face-up, same-suit, strictly
descending run, but it may be dropped on any face-up card one rank higher
regardless of suit. Mixed-suit sequences built that way cannot be moved as
a unit afterwards.
"""
from typing import Optional

from spider.History import ClearedRun, Flip
from spider.Table import ACE, KING, NUM_PER_SUIT, Table


def isMovableStack(table: Table, column: int, startIndex: int) -> bool:
    if not table.isValidColumn(column):
        return False
    stack = table.column(column)
    if startIndex < 0 or startIndex >= len(stack):
        return False
    return isValidSequence(table, stack[startIndex:])


def isValidSequence(table: Table, cardIds) -> bool:
    if len(cardIds) == 0:
        return False
    for cardId in cardIds:
        if not table.isFaceUp(cardId):
            return False
    base = table.card(cardIds[0])
    for i in range(1, len(cardIds)):
        upper = table.card(cardIds[i])
        if not base.suitableAsSequenceFor(upper):
            return False
        base = upper
    return True


def isValidDestination(table: Table, cardId: int, column: int) -> bool:
    if not table.isValidColumn(column):
        return False
    top = table.top(column)
    if top is None:
        return True
    if not table.isFaceUp(top):
        return False
    return table.card(top).suitableAsBaseFor(table.card(cardId))


def movableStart(table: Table, column: int) -> Optional[int]:
    """Index of the deepest card that can still be picked up with everything above it."""
    if not table.isValidColumn(column):
        return None
    stack = table.column(column)
    if len(stack) == 0 or not table.isFaceUp(stack[-1]):
        return None
    idx = len(stack) - 1
    while idx > 0:
        base = stack[idx - 1]
        if not table.isFaceUp(base) or not table.card(base).suitableAsSequenceFor(table.card(stack[idx])):
            break
        idx -= 1
    return idx


def validTargets(table: Table, column: int, index: int) -> tuple[int, ...]:
    if not isMovableStack(table, column, index):
        return ()
    cardId = table.column(column)[index]
    return tuple(
        dest for dest in range(table.stackCount)
        if dest != column and isValidDestination(table, cardId, dest)
    )


def existValidMove(table: Table) -> bool:
    for idx in range(table.stackCount):
        stack = table.column(idx)
        if len(stack) == 0:
            continue
        if not table.isFaceUp(stack[-1]):
            return True
        start = movableStart(table, idx)
        for i in range(len(stack) - 1, start - 1, -1):
            targets = validTargets(table, idx, i)
            if i == 0:
                # moving a whole column onto an empty one changes nothing
                targets = [dest for dest in targets if len(table.column(dest)) > 0]
            if targets:
                return True
    return False


def isCompleteRun(table: Table, cardIds) -> bool:
    if len(cardIds) != NUM_PER_SUIT:
        return False
    if not isValidSequence(table, cardIds):
        return False
    return table.card(cardIds[0]).num == KING and table.card(cardIds[-1]).num == ACE


def revealTop(table: Table, column: int) -> Optional[Flip]:
    top = table.top(column)
    if top is None or table.isFaceUp(top):
        return None
    table.setFaceUp(top, True)
    return Flip(column, top)


def tryCompleteRun(table: Table, column: int) -> Optional[ClearedRun]:
    """
    Clear a finished King-to-Ace run from the top of ``column``.

    Only one run is removed per call. If the card underneath is face-down it
    is turned over and reported on the returned record.
    """
    stack = table.column(column)
    if len(stack) < NUM_PER_SUIT:
        return None
    tail = stack[len(stack) - NUM_PER_SUIT:]
    if not isCompleteRun(table, tail):
        return None
    removed = table.takeCards(column, len(stack) - NUM_PER_SUIT)
    table.appendFoundation(removed)
    flip = revealTop(table, column)
    return ClearedRun(column, tuple(removed), flip)
