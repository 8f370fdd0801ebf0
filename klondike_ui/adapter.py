from klondike.Core import Core
from klondike.Model import FOUNDATION_COUNT, TABLEAU_COUNT, Card, GameState, MoveRequest, PileRef, lastOf
from klondike_ui.view_model import CardView, GameViewModel, StackView


class CoreAdapter:
    """Bridges engine snapshots to a renderer-friendly model."""

    @staticmethod
    def card_view(card: Card, hidden=False) -> CardView:
        return CardView(id=card.id, suit=card.suit, rank=card.rank, hidden=hidden, label=card.label())

    @staticmethod
    def snapshot(state: GameState) -> GameViewModel:
        tableau = []
        for pile in state.tableau:
            cards = tuple(CoreAdapter.card_view(tc.card, hidden=not tc.face_up) for tc in pile)
            tableau.append(StackView(cards=cards))
        fan = tuple(CoreAdapter.card_view(c) for c in state.waste[-state.draw_count:])
        tops = tuple(CoreAdapter.card_view(lastOf(p)) if p else None for p in state.foundations)
        return GameViewModel(
            stock_count=len(state.stock),
            waste_count=len(state.waste),
            waste_fan=fan,
            foundation_tops=tops,
            foundation_counts=tuple(len(p) for p in state.foundations),
            tableau=tuple(tableau),
            draw_count=state.draw_count,
            won=state.isWon(),
        )

    @staticmethod
    def drop_targets(core: Core, src: PileRef) -> list[PileRef]:
        """Every destination the engine would accept for a run starting at src."""
        candidates = [PileRef.foundation(i) for i in range(FOUNDATION_COUNT)]
        candidates += [PileRef.tableau(i) for i in range(TABLEAU_COUNT)]
        return [dest for dest in candidates if core.canMove(MoveRequest(src, dest))]
