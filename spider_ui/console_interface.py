import argparse
import logging
import sys

from spider.Core import Core, GameConfig
from spider.Interface import Interface
from spider.Rules import movableStart
from spider.Table import NUMS, SUITS
from spider_ui import settings_store
from spider_ui.adapter import CoreAdapter
from spider_ui.view_model import CardView, GameViewModel

HELP = """Commands:
  mv S[:I] D    move the stack starting at card I of column S onto column D
                (without I the longest movable stack is taken)
  sel S I       select the stack starting at card I of column S
  to D          move the selected stack onto column D
  deal          deal one card onto every column
  undo          take back the last move or deal
  undo on|off   enable or disable undo
  new           start a new game
  quit          leave"""


def cardStr(card: CardView):
    if not card.face_up:
        return "---"
    return SUITS[card.suit] + NUMS[card.num]


def renderLines(vm: GameViewModel) -> list[str]:
    lines = [
        f"Finished: {vm.foundation_count} / 8        Deals left: {vm.deals_remaining}"
        f"        Undo: {'on' if vm.undo_enabled else 'off'}",
        "".join(f"--{'*' if s.highlighted else '-'}{i}-" for i, s in enumerate(vm.stacks)) + "-",
    ]
    i = 0
    while True:
        has = False
        line = f"{i:>2}: "
        for col, stack in enumerate(vm.stacks):
            if len(stack.cards) <= i:
                line += "     "
                continue
            has = True
            mark = ">" if vm.selection == (col, i) else " "
            line += mark + cardStr(stack.cards[i]) + " "
        if not has:
            break
        lines.append(line)
        i += 1
    return lines


class CommandLineInterface(Interface):

    def __init__(self, out=None):
        super().__init__()
        self.out = out

    def write(self, text=""):
        print(text, file=self.out if self.out is not None else sys.stdout)

    def printAll(self):
        for line in renderLines(CoreAdapter.snapshot(self.core)):
            self.write(line)
        self.write()

    def onStart(self):
        self.write("Game started!")
        self.printAll()

    def onEvent(self, action):
        for event in CoreAdapter.action_to_animations(action):
            if event.type == "COMPLETE_RUN":
                self.write(f"Run completed on column {event.payload['stack']}!")
        super().onEvent(action)

    def notifyRedraw(self):
        self.printAll()

    def onWin(self):
        self.write("You win!")


def parseSource(core: Core, text: str):
    if ":" in text:
        s, idx = text.split(":", 1)
        return int(s), int(idx)
    s = int(text)
    return s, movableStart(core.table, s)


def execute(core: Core, ui: CommandLineInterface, command: str) -> bool:
    """Run one console command. Returns False when the player wants to leave."""
    parts = command.split()
    if not parts:
        return True
    name, args = parts[0], parts[1:]
    if name in ("quit", "exit"):
        return False
    if name == "help":
        ui.write(HELP)
    elif name == "mv" and len(args) == 2:
        try:
            src, idx = parseSource(core, args[0])
            dest = int(args[1])
        except ValueError:
            ui.write("Invalid index!")
            return True
        if idx is None or not core.performMove(src, idx, dest):
            ui.write("Cannot move!")
    elif name == "sel" and len(args) == 2:
        try:
            src, idx = int(args[0]), int(args[1])
        except ValueError:
            ui.write("Invalid index!")
            return True
        if not core.select(src, idx):
            ui.write("Nothing selected.")
    elif name == "to" and len(args) == 1:
        try:
            dest = int(args[0])
        except ValueError:
            ui.write("Invalid index!")
            return True
        if not core.moveSelection(dest):
            ui.write("Cannot move!")
    elif name == "deal":
        if not core.performDeal():
            if core.stockCount < core.config.dealSize:
                ui.write("No card left!")
            else:
                ui.write("Every column needs at least one card before dealing.")
    elif name == "undo" and len(args) == 1 and args[0] in ("on", "off"):
        enabled = args[0] == "on"
        settings_store.save_undo_enabled(enabled)
        core.setUndoEnabled(enabled)
    elif name == "undo":
        if not core.undo():
            ui.write("Cannot undo!")
    elif name == "new":
        core.newGame(GameConfig())
    else:
        ui.write("Invalid command!")
    if not core.gameEnded and not core.existValidMove() and not core.canDeal():
        ui.write("No moves left.")
    return True


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Two-suit Spider Solitaire in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deal.")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, WARNING).")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    interface = CommandLineInterface()
    core = Core(undoEnabled=settings_store.load_undo_enabled())
    core.registerInterface(interface)
    core.newGame(GameConfig(seed=args.seed))
    interface.write(HELP)
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        if not execute(core, interface, command):
            break


if __name__ == "__main__":
    main()
