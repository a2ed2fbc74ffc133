class Interface:
    """
    Presentation side of the board. The board calls these hooks after it changes;
    implementations may read the board but must not mutate it.
    """

    def __init__(self):
        self.board = None

    def onStart(self):
        pass

    def onEvent(self, event):
        """
        Invoked when a board event is performed.
        :param event: a BoardEvent
        :return:
        """
        self.notifyRedraw()
        pass

    def notifyRedraw(self):
        pass

    def onWin(self):
        pass
