from dataclasses import dataclass
from typing import List, Optional

NUM_PER_SUIT = 13
FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7
DECK_SIZE = 52

SUITS = ("hearts", "diamonds", "clubs", "spades")
RED_SUITS = ("hearts", "diamonds")
SUIT_SYMBOLS = {"hearts": "♥", "diamonds": "♦", "clubs": "♣", "spades": "♠"}
RANK_NAMES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

STOCK = "stock"
WASTE = "waste"
FOUNDATION = "foundation"
TABLEAU = "tableau"
PILE_KINDS = (STOCK, WASTE, FOUNDATION, TABLEAU)


def lastOf(lst):
    return lst[len(lst) - 1]


@dataclass(frozen=True)
class Card:
    id: int
    suit: str
    rank: int

    def isRed(self):
        return self.suit in RED_SUITS

    def color(self):
        if self.isRed():
            return "red"
        else:
            return "black"

    def sameCard(self, other):
        """Rule-level equality, ignoring the id."""
        return self.suit == other.suit and self.rank == other.rank

    def label(self):
        return RANK_NAMES[self.rank - 1] + SUIT_SYMBOLS[self.suit]

    def __str__(self):
        return self.label()

    @staticmethod
    def fromId(cardId):
        if cardId < 0 or cardId >= DECK_SIZE:
            raise ValueError(f"card id out of range: {cardId}")
        return Card(cardId, SUITS[cardId // NUM_PER_SUIT], cardId % NUM_PER_SUIT + 1)

    @staticmethod
    def fromSuitAndRank(suit, rank):
        return Card(SUITS.index(suit) * NUM_PER_SUIT + rank - 1, suit, rank)


def fullDeck():
    return [Card.fromId(i) for i in range(DECK_SIZE)]


@dataclass(frozen=True)
class TableauCard:
    card: Card
    face_up: bool = False

    def flipped(self):
        return TableauCard(self.card, True)

    def __str__(self):
        if not self.face_up:
            return "---"
        return self.card.label()


@dataclass
class GameState:
    """
    The aggregate root of one game.

    Every pile is ordered bottom to top, so the last element is the card a
    player sees (and the next card drawn, for the stock).
    """
    stock: List[Card]
    waste: List[Card]
    foundations: List[List[Card]]
    tableau: List[List[TableauCard]]
    draw_count: int = 3

    def copy(self) -> "GameState":
        # cards are immutable, copying the pile lists is enough
        return GameState(
            stock=list(self.stock),
            waste=list(self.waste),
            foundations=[list(pile) for pile in self.foundations],
            tableau=[list(pile) for pile in self.tableau],
            draw_count=self.draw_count,
        )

    def cardIds(self):
        ids = [c.id for c in self.stock]
        ids += [c.id for c in self.waste]
        for pile in self.foundations:
            ids += [c.id for c in pile]
        for pile in self.tableau:
            ids += [tc.card.id for tc in pile]
        return ids

    def isWon(self):
        return isWon(self)

    @staticmethod
    def empty(drawCount=3):
        return GameState(
            stock=[],
            waste=[],
            foundations=[[] for _ in range(FOUNDATION_COUNT)],
            tableau=[[] for _ in range(TABLEAU_COUNT)],
            draw_count=drawCount,
        )


def isWon(state: GameState) -> bool:
    return len(state.foundations) == FOUNDATION_COUNT and all(
        len(pile) == NUM_PER_SUIT for pile in state.foundations
    )


@dataclass(frozen=True)
class PileRef:
    kind: str
    index: Optional[int] = None
    card_index: Optional[int] = None

    @staticmethod
    def stock():
        return PileRef(STOCK)

    @staticmethod
    def waste():
        return PileRef(WASTE)

    @staticmethod
    def foundation(index):
        return PileRef(FOUNDATION, index)

    @staticmethod
    def tableau(index, cardIndex=None):
        return PileRef(TABLEAU, index, cardIndex)

    def __str__(self):
        if self.kind == TABLEAU and self.card_index is not None:
            return f"{self.kind}[{self.index}:{self.card_index}]"
        if self.index is not None:
            return f"{self.kind}[{self.index}]"
        return self.kind


@dataclass(frozen=True)
class MoveRequest:
    src: PileRef
    dest: PileRef

    def __str__(self):
        return f"{self.src} -> {self.dest}"


def cardToDict(card: Card) -> dict:
    return {"id": card.id, "suit": card.suit, "rank": card.rank}


def cardFromDict(data: dict) -> Card:
    card = Card(int(data["id"]), str(data["suit"]), int(data["rank"]))
    if card.suit not in SUITS or not 1 <= card.rank <= NUM_PER_SUIT:
        raise ValueError(f"malformed card: {data!r}")
    return card


def stateToDict(state: GameState) -> dict:
    return {
        "stock": [cardToDict(c) for c in state.stock],
        "waste": [cardToDict(c) for c in state.waste],
        "foundations": [[cardToDict(c) for c in pile] for pile in state.foundations],
        "tableau": [
            [{"card": cardToDict(tc.card), "face_up": tc.face_up} for tc in pile]
            for pile in state.tableau
        ],
        "draw_count": state.draw_count,
    }


def stateFromDict(data: dict) -> GameState:
    """Decodes the wire format. Raises ValueError/KeyError/TypeError on malformed input."""
    return GameState(
        stock=[cardFromDict(c) for c in data["stock"]],
        waste=[cardFromDict(c) for c in data["waste"]],
        foundations=[[cardFromDict(c) for c in pile] for pile in data["foundations"]],
        tableau=[
            [TableauCard(cardFromDict(entry["card"]), bool(entry["face_up"])) for entry in pile]
            for pile in data["tableau"]
        ],
        draw_count=int(data.get("draw_count", 3)),
    )


def refToDict(ref: PileRef) -> dict:
    data = {"kind": ref.kind}
    if ref.index is not None:
        data["index"] = ref.index
    if ref.card_index is not None:
        data["card_index"] = ref.card_index
    return data


def refFromDict(data: dict) -> PileRef:
    kind = data["kind"]
    if kind not in PILE_KINDS:
        raise ValueError(f"unknown pile kind: {kind!r}")

    def optInt(key):
        value = data.get(key)
        return None if value is None else int(value)

    return PileRef(kind, optInt("index"), optInt("card_index"))


def requestFromDict(data: dict) -> MoveRequest:
    return MoveRequest(refFromDict(data["from"]), refFromDict(data["to"]))
