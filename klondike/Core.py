import logging
import random
import threading

from klondike.Model import (
    DECK_SIZE,
    FOUNDATION,
    FOUNDATION_COUNT,
    NUM_PER_SUIT,
    STOCK,
    TABLEAU,
    TABLEAU_COUNT,
    WASTE,
    Card,
    GameState,
    MoveRequest,
    TableauCard,
    fullDeck,
    isWon,
    lastOf,
)

logger = logging.getLogger(__name__)

DRAW_MODES = (1, 3)


class GameError(Exception):
    """A rejected request. The message is meant to be shown to the player."""


class EmptySource(GameError):
    pass


class InvalidIndex(GameError):
    pass


class InvalidRun(GameError):
    pass


class IllegalSource(GameError):
    pass


class IllegalDestination(GameError):
    pass


class RuleViolation(GameError):
    pass


class DegenerateMove(GameError):
    pass


class InvalidMode(GameError):
    pass


class InvalidState(GameError):
    pass


class GameConfig:
    def __init__(self, drawCount=3, seed=None):
        self.drawCount = drawCount
        self.seed = seed


DEFAULT_CONFIG = GameConfig()


def shuffledDeck(rng):
    deck = fullDeck()
    rng.shuffle(deck)
    return deck


def dealState(deck, drawCount=3):
    """Deals seven tableau piles from the end of the deck; the rest is the stock."""
    deck = list(deck)
    tableau = []
    for pileIndex in range(TABLEAU_COUNT):
        pile = []
        for cardIndex in range(pileIndex + 1):
            pile.append(TableauCard(deck.pop(), cardIndex == pileIndex))
        tableau.append(pile)
    return GameState(
        stock=deck,
        waste=[],
        foundations=[[] for _ in range(FOUNDATION_COUNT)],
        tableau=tableau,
        draw_count=drawCount,
    )


def isValidRun(cards):
    """
    :param cards: tableau cards ordered from the lead (lowest in the pile) upward
    :return: True if every adjacent pair alternates colour and descends by one
    """
    if len(cards) == 0:
        return False
    for i in range(len(cards) - 1):
        base = cards[i].card
        upper = cards[i + 1].card
        if base.rank != upper.rank + 1:
            return False
        if base.isRed() == upper.isRed():
            return False
    return True


def canPlaceOnFoundation(pile, card):
    if len(pile) == 0:
        return card.rank == 1
    top = lastOf(pile)
    return top.suit == card.suit and card.rank == top.rank + 1


def canPlaceOnTableau(pile, lead):
    if len(pile) == 0:
        return lead.rank == NUM_PER_SUIT
    top = lastOf(pile)
    if not top.face_up:
        return False
    return top.card.rank == lead.rank + 1 and top.card.isRed() != lead.isRed()


def isDrawMode(drawCount):
    # exact ints only: True and 3.0 compare equal to 1 and 3
    return type(drawCount) is int and drawCount in DRAW_MODES


def checkStructure(state: GameState):
    if not isDrawMode(state.draw_count):
        raise InvalidState(f"Draw count must be 1 or 3, got {state.draw_count!r}")
    if len(state.foundations) != FOUNDATION_COUNT:
        raise InvalidState(f"Expected {FOUNDATION_COUNT} foundations, got {len(state.foundations)}")
    if len(state.tableau) != TABLEAU_COUNT:
        raise InvalidState(f"Expected {TABLEAU_COUNT} tableau piles, got {len(state.tableau)}")
    for pile in state.tableau:
        if any(not isinstance(tc, TableauCard) for tc in pile):
            raise InvalidState("Tableau piles may only hold tableau cards")
    cards = list(state.stock) + list(state.waste)
    for pile in state.foundations:
        cards += pile
    for pile in state.tableau:
        cards += [tc.card for tc in pile]
    for card in cards:
        if not isinstance(card, Card) or not 0 <= card.id < DECK_SIZE or card != Card.fromId(card.id):
            raise InvalidState(f"Card {card!r} does not match its id")
    ids = state.cardIds()
    if len(ids) != DECK_SIZE or set(ids) != set(range(DECK_SIZE)):
        raise InvalidState("State must hold each of the 52 cards exactly once")


class MoveSource:
    """The resolved start of a move: which pile and which cards leave it."""

    def __init__(self, kind, index, cardIndex, cards):
        self.kind = kind
        self.index = index
        self.cardIndex = cardIndex
        self.cards = cards  # plain Card values, lead card first


class Core:
    """
    The rules engine. Owns one GameState and is its only mutator.

    Every public operation returns a snapshot; a rejected request raises a
    GameError and leaves the state untouched.
    ask*** checks happen before any do*** mutation.
    """

    def __init__(self, state: GameState = None, config: GameConfig = DEFAULT_CONFIG):
        self.lock = threading.RLock()
        self.state = None
        if state is None:
            self.newGame(config)
        else:
            self.setState(state)

    def newGame(self, config: GameConfig = None) -> GameState:
        if config is None:
            config = DEFAULT_CONFIG
        if not isDrawMode(config.drawCount):
            raise InvalidMode("Draw count must be 1 or 3")
        rng = random.Random(config.seed)
        with self.lock:
            self.state = dealState(shuffledDeck(rng), config.drawCount)
            logger.debug("new deal, seed=%s draw_count=%d", config.seed, config.drawCount)
            return self.state.copy()

    def getState(self) -> GameState:
        with self.lock:
            return self.state.copy()

    def setState(self, state: GameState) -> GameState:
        """Trusted restore: structure is checked, the rules are not."""
        checkStructure(state)
        with self.lock:
            self.state = state.copy()
            logger.debug("state restored")
            return self.state.copy()

    def isWon(self) -> bool:
        with self.lock:
            return isWon(self.state)

    def setDrawCount(self, drawCount) -> GameState:
        if not isDrawMode(drawCount):
            raise InvalidMode(f"Draw count must be 1 or 3, got {drawCount!r}")
        with self.lock:
            self.state.draw_count = drawCount
            return self.state.copy()

    def draw(self) -> GameState:
        with self.lock:
            self.doDraw(self.state)
            return self.state.copy()

    def canMove(self, request: MoveRequest) -> bool:
        with self.lock:
            try:
                self.checkMove(self.state, request)
            except GameError:
                return False
            return True

    def moveCards(self, request: MoveRequest) -> GameState:
        with self.lock:
            try:
                source = self.checkMove(self.state, request)
            except GameError as err:
                logger.debug("rejected move %s: %s", request, err)
                raise
            self.doMove(self.state, source, request.dest)
            self.doReveal(self.state)
            return self.state.copy()

    def checkMove(self, state, request: MoveRequest) -> MoveSource:
        src, dest = request.src, request.dest
        source = self.resolveSource(state, src)
        if src.kind == TABLEAU and dest.kind == TABLEAU and src.index == dest.index:
            raise DegenerateMove("Cannot move cards onto the same tableau pile")
        self.checkDestination(state, source, dest)
        return source

    @staticmethod
    def __pileIndex(index, count, name):
        if index is None:
            raise InvalidIndex(f"{name} index required")
        if index < 0 or index >= count:
            raise InvalidIndex(f"{name} index out of range")
        return index

    def resolveSource(self, state, src) -> MoveSource:
        if src.kind == WASTE:
            if len(state.waste) == 0:
                raise EmptySource("Waste is empty")
            return MoveSource(WASTE, None, None, [lastOf(state.waste)])

        if src.kind == FOUNDATION:
            idx = Core.__pileIndex(src.index, len(state.foundations), "Foundation")
            pile = state.foundations[idx]
            if len(pile) == 0:
                raise EmptySource("Foundation is empty")
            return MoveSource(FOUNDATION, idx, None, [lastOf(pile)])

        if src.kind == TABLEAU:
            idx = Core.__pileIndex(src.index, len(state.tableau), "Tableau")
            pile = state.tableau[idx]
            cardIndex = src.card_index
            if cardIndex is None:
                if len(pile) == 0:
                    raise EmptySource("Tableau pile is empty")
                cardIndex = len(pile) - 1
            if cardIndex < 0 or cardIndex >= len(pile):
                raise InvalidIndex("Tableau card index out of range")
            run = pile[cardIndex:]
            if any(not tc.face_up for tc in run):
                raise InvalidRun("Cannot move face-down cards")
            if not isValidRun(run):
                raise InvalidRun("Tableau run is invalid")
            return MoveSource(TABLEAU, idx, cardIndex, [tc.card for tc in run])

        if src.kind == STOCK:
            raise IllegalSource("Use draw to move from stock")
        raise IllegalSource(f"Cannot move cards from {src.kind}")

    def checkDestination(self, state, source: MoveSource, dest):
        if dest.kind == FOUNDATION:
            idx = Core.__pileIndex(dest.index, len(state.foundations), "Foundation")
            if len(source.cards) != 1:
                raise IllegalDestination("Only one card can move to foundation")
            if not canPlaceOnFoundation(state.foundations[idx], source.cards[0]):
                raise RuleViolation("Card cannot be placed on foundation")
            return
        if dest.kind == TABLEAU:
            idx = Core.__pileIndex(dest.index, len(state.tableau), "Tableau")
            if not canPlaceOnTableau(state.tableau[idx], source.cards[0]):
                raise RuleViolation("Card cannot be placed on tableau")
            return
        raise IllegalDestination("Cannot move cards to that pile")

    def doMove(self, state, source: MoveSource, dest):
        if source.kind == WASTE:
            state.waste.pop()
        elif source.kind == FOUNDATION:
            state.foundations[source.index].pop()
        else:
            del state.tableau[source.index][source.cardIndex:]

        if dest.kind == FOUNDATION:
            state.foundations[dest.index].append(source.cards[0])
        else:
            state.tableau[dest.index].extend(TableauCard(card, True) for card in source.cards)

    @staticmethod
    def doReveal(state):
        """Turns every face-down tableau top face up. Returns the flipped pile indices."""
        flipped = []
        for i, pile in enumerate(state.tableau):
            if len(pile) > 0 and not lastOf(pile).face_up:
                pile[len(pile) - 1] = lastOf(pile).flipped()
                flipped.append(i)
        return flipped

    @staticmethod
    def doDraw(state):
        """Returns the number of cards drawn; a recycle draws nothing."""
        stock = state.stock
        waste = state.waste
        if len(stock) == 0:
            while len(waste) > 0:
                stock.append(waste.pop())
            return 0
        drawCount = min(max(1, state.draw_count), len(stock))
        for _ in range(drawCount):
            waste.append(stock.pop())
        return drawCount
