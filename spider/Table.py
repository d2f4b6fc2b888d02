import random
from dataclasses import dataclass

NUM_PER_SUIT = 13
SUIT_COUNT = 2
COPIES = 4
SUITS = "♠♥"
NUMS = ("A ", "2 ", "3 ", "4 ", "5 ", "6 ", "7 ", "8 ", "9 ", "10", "J ", "Q ", "K ")
KING = NUM_PER_SUIT - 1
ACE = 0


class TableIntegrityError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class Card:
    id: int
    suit: int
    num: int

    def suitableAsBaseFor(self, upper: "Card"):
        return self.num == upper.num + 1

    def suitableAsSequenceFor(self, upper: "Card"):
        return self.suit == upper.suit and self.num == upper.num + 1


def buildDeck(copies=COPIES, suits=SUIT_COUNT) -> list[Card]:
    """
    Cards are created copy by copy, suit by suit, King down to Ace, with ids
    counting up from 1. The order is fixed so that a seeded shuffle always
    yields the same game.
    """
    deck = []
    cardId = 0
    for _ in range(copies):
        for suit in range(suits):
            for num in range(KING, ACE - 1, -1):
                cardId += 1
                deck.append(Card(cardId, suit, num))
    return deck


def shuffleCards(lst: list, rng: random.Random = None):
    """In-place Fisher-Yates shuffle; ``randrange`` keeps every permutation equally likely."""
    rng = rng if rng is not None else random
    for i in range(len(lst) - 1, 0, -1):
        j = rng.randrange(i + 1)
        lst[i], lst[j] = lst[j], lst[i]
    return lst


class Table:
    """
    The cards of one game and the containers that own them.

    Cards live in a single arena keyed by id; columns, stock and foundations
    only hold ids, so a card can never be in two places at once. Face-up
    state is kept beside the arena since cards themselves are immutable.
    """

    def __init__(self, cards: list[Card], stackCount=10):
        self.cards: dict[int, Card] = {card.id: card for card in cards}
        self.faceUp: dict[int, bool] = {card.id: False for card in cards}
        self.columns: list[list[int]] = [[] for _ in range(stackCount)]
        self.stock: list[int] = []
        self.foundations: list[tuple[int, ...]] = []

    @staticmethod
    def fromLayout(columns, stock=(), foundations=()):
        """
        Build an arbitrary position.

        :param columns: lists of ``(card, faceUp)`` pairs, bottom first
        :param stock: cards of the stock, the last one is dealt first
        :param foundations: completed runs as sequences of cards
        """
        cards = []
        for column in columns:
            cards.extend(card for card, _ in column)
        cards.extend(stock)
        for run in foundations:
            cards.extend(run)
        table = Table(cards, len(columns))
        for idx, column in enumerate(columns):
            for card, up in column:
                table.columns[idx].append(card.id)
                table.faceUp[card.id] = bool(up)
        table.stock = [card.id for card in stock]
        for run in foundations:
            for card in run:
                table.faceUp[card.id] = True
            table.foundations.append(tuple(card.id for card in run))
        return table

    @property
    def stackCount(self):
        return len(self.columns)

    def card(self, cardId: int) -> Card:
        return self.cards[cardId]

    def isValidColumn(self, idx):
        return 0 <= idx < len(self.columns)

    def column(self, idx) -> list[int]:
        return self.columns[idx]

    def top(self, idx):
        column = self.columns[idx]
        if len(column) == 0:
            return None
        return column[-1]

    def isFaceUp(self, cardId):
        return self.faceUp[cardId]

    def setFaceUp(self, cardId, up=True):
        self.faceUp[cardId] = up

    def placeCards(self, idx, cardIds):
        self.columns[idx].extend(cardIds)

    def takeCards(self, idx, start) -> list[int]:
        column = self.columns[idx]
        taken = column[start:]
        del column[start:]
        return taken

    def insertCards(self, idx, start, cardIds):
        self.columns[idx][start:start] = cardIds

    def pushStock(self, cardId):
        self.stock.append(cardId)

    def popStock(self):
        return self.stock.pop()

    def appendFoundation(self, cardIds):
        self.foundations.append(tuple(cardIds))

    def popFoundation(self):
        return self.foundations.pop()

    def snapshot(self):
        return (
            tuple(tuple(column) for column in self.columns),
            tuple(self.stock),
            tuple(self.foundations),
            frozenset(cardId for cardId, up in self.faceUp.items() if up),
        )

    def checkIntegrity(self):
        seen = set()
        containers = list(self.columns) + [self.stock] + list(self.foundations)
        for container in containers:
            for cardId in container:
                if cardId not in self.cards:
                    raise TableIntegrityError(f"unknown card {cardId}")
                if cardId in seen:
                    raise TableIntegrityError(f"card {cardId} is owned twice")
                seen.add(cardId)
        if len(seen) != len(self.cards):
            raise TableIntegrityError(f"{len(self.cards) - len(seen)} cards are not owned by any container")
        for idx, column in enumerate(self.columns):
            up = False
            for cardId in column:
                if self.faceUp[cardId]:
                    up = True
                elif up:
                    raise TableIntegrityError(f"hidden card {cardId} above a face-up card in column {idx}")

    def encodeStack(self, cardIds):
        if len(cardIds) == 0:
            return "empty"
        return ",".join(f"{cardId} {0 if self.faceUp[cardId] else 1}" for cardId in cardIds)
