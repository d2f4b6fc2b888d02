from spider.History import GameAction


class Interface:
    """Hooks the controller calls after it changes the table. All of them are optional."""

    def __init__(self):
        self.core = None

    def onStart(self):
        pass

    def onEvent(self, action: GameAction):
        """
        Invoked after a move or deal has been committed.
        :param action: the record appended to the history
        """
        self.notifyRedraw()

    def onUndoEvent(self, action: GameAction):
        """
        Invoked after a history record has been reversed.
        :param action: the record that was undone
        """
        self.notifyRedraw()

    def onSelect(self, selection):
        self.notifyRedraw()

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass
