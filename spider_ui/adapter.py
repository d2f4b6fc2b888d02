from spider.Core import Core
from spider.History import DealAction, GameAction, MoveAction
from spider_ui.view_model import AnimationEvent, CardView, GameViewModel, StackView


class CoreAdapter:
    """Turns the controller state and its history records into a renderer-friendly model."""

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        table = core.table
        targets = set(core.validTargets())
        stacks = []
        for idx, column in enumerate(table.columns):
            cards = tuple(
                CardView(id=card.id, suit=card.suit, num=card.num, face_up=table.isFaceUp(card.id))
                for card in map(table.card, column)
            )
            stacks.append(StackView(cards=cards, highlighted=idx in targets))
        selection = None
        if core.selection is not None:
            selection = (core.selection.column, core.selection.index)
        return GameViewModel(
            stock_count=core.stockCount,
            deals_remaining=core.dealsRemaining,
            foundation_count=core.foundationCount,
            game_complete=core.isComplete,
            stacks=tuple(stacks),
            selection=selection,
            undo_enabled=core.undoEnabled,
            can_undo=core.canUndo,
        )

    @staticmethod
    def action_to_animations(action: GameAction) -> list[AnimationEvent]:
        events = []
        if isinstance(action, MoveAction):
            events.append(AnimationEvent(
                type="MOVE",
                payload={"src": (action.fromColumn, action.fromIndex), "dest": action.toColumn,
                         "cards": action.cards},
            ))
            for flip in action.flipped:
                events.append(AnimationEvent(type="REVEAL", payload={"stack": flip.column, "card": flip.card}))
            runs = (action.clearedRun,) if action.clearedRun is not None else ()
        elif isinstance(action, DealAction):
            events.append(AnimationEvent(type="DEAL", payload={"dealt": action.dealt}))
            runs = action.clearedRuns
        else:
            return [AnimationEvent(type="UNKNOWN", payload={"event": type(action).__name__})]
        for run in runs:
            events.append(AnimationEvent(type="COMPLETE_RUN", payload={"stack": run.column, "cards": run.cards}))
            if run.flip is not None:
                events.append(AnimationEvent(type="REVEAL", payload={"stack": run.flip.column, "card": run.flip.card}))
        return events
