import logging

from klondike.Core import Core, GameConfig, GameError
from klondike.History import HistoryRecorder
from klondike.Model import MoveRequest, PileRef, TABLEAU_COUNT, lastOf

HELP = """Commands:
  new              deal a new game
  draw             draw from the stock (recycles the waste when empty)
  mv SRC DST       move cards, e.g. "mv w f0", "mv t3 t5", "mv t3:2 t5"
                   w = waste, fN = foundation N, tN = tableau N, tN:I = run from card I
  mode 1|3         set the draw count
  undo             undo the last action
  quit             leave the game"""


def parseRef(token: str) -> PileRef:
    token = token.strip().lower()
    if token in ("w", "waste"):
        return PileRef.waste()
    if token in ("s", "stock"):
        return PileRef.stock()
    if token.startswith("f"):
        return PileRef.foundation(int(token[1:]))
    if token.startswith("t"):
        body = token[1:]
        if ":" in body:
            (pile, card) = body.split(":", 1)
            return PileRef.tableau(int(pile), int(card))
        return PileRef.tableau(int(body))
    raise ValueError(f"unknown pile: {token}")


def tableText(state) -> str:
    lines = []
    waste = " ".join(c.label() for c in state.waste[-state.draw_count:]) or "--"
    founds = "  ".join(lastOf(p).label() if p else "--" for p in state.foundations)
    lines.append(f"Stock: {len(state.stock):2d}   Waste: {waste}   Draw: {state.draw_count}")
    lines.append(f"Foundations: {founds}")
    lines.append("----" + "".join(f"--t{i}--" for i in range(TABLEAU_COUNT)))
    i = 0
    while True:
        has = False
        line = f"{i:2d}: "
        for pile in state.tableau:
            if len(pile) <= i:
                line += "      "
                continue
            has = True
            line += f"{str(pile[i]):>4}  "
        if not has:
            break
        lines.append(line.rstrip())
        i += 1
    return "\n".join(lines)


class CommandLineInterface:

    def __init__(self, core: Core = None, config: GameConfig = None):
        self.core = core if core is not None else Core(config=config or GameConfig())
        self.history = HistoryRecorder()

    def printAll(self):
        print(tableText(self.core.getState()))
        print()

    def handle(self, command: str) -> bool:
        """Runs one command; returns False once the player quits."""
        words = command.split()
        if not words:
            return True
        name = words[0].lower()
        if name in ("quit", "exit", "q"):
            return False
        if name == "help":
            print(HELP)
            return True
        if name == "undo":
            previous = self.history.undo()
            if previous is None:
                print("Cannot undo!")
                return True
            self.core.setState(previous)
            self.printAll()
            return True
        if name == "new":
            self.history.clear()
            self.core.newGame(GameConfig(self.core.getState().draw_count))
            self.printAll()
            return True

        before = self.core.getState()
        try:
            if name == "draw":
                after = self.core.draw()
                if after == before:
                    print("No card left!")
                    return True
            elif name == "mv":
                if len(words) != 3:
                    print("Usage: mv SRC DST")
                    return True
                try:
                    request = MoveRequest(parseRef(words[1]), parseRef(words[2]))
                except ValueError:
                    print("Invalid pile!")
                    return True
                self.core.moveCards(request)
            elif name == "mode":
                try:
                    count = int(words[1])
                except (IndexError, ValueError):
                    print("Usage: mode 1|3")
                    return True
                if self.core.setDrawCount(count) == before:
                    print(f"Already drawing {count}.")
                    return True
            else:
                print("Invalid command!")
                return True
        except GameError as err:
            print(f"Cannot do that: {err}")
            return True
        self.history.log(before)
        self.printAll()
        if self.core.isWon():
            print("You win!")
        return True


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    interface = CommandLineInterface()
    print("Game started! Type 'help' for commands.")
    interface.printAll()
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        if not interface.handle(command):
            break


if __name__ == '__main__':
    main()
