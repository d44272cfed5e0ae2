"""
Console protocol handler: play checkers from a terminal or a script.

The handler reads one command per line from stdin and writes replies to
stdout. stdout carries protocol replies only; diagnostics go to the log
(stderr), so the output can be piped into another program.

Commands:
    new [pvp|ai] [easy|medium|hard]   start a new game            -> ok
    show                              board diagram                -> turn <side>
    moves [sq]                        moves for the side or square -> moves ...
    move <m>                          play "21-30" or "52x34"      -> played <m>
    go                                engine plays the side to move -> played <m>
    quit                              exit

After a move the handler replies "continue <sq>" when the same side must
keep capturing, "turn <side>" when the turn passed, or "winner <side>" when
the game ended. Rejected commands reply "error <reason>".

Usage: python -m interface.console
"""

import logging
import sys
from typing import TextIO

from engine.board import IllegalMoveError, Move, Square
from engine.game import Game, GameMode
from engine.search import Difficulty

_log = logging.getLogger(__name__)


class ConsoleHandler:
    """
    Stateful handler for the console protocol.

    Holds one Game and dispatches commands to it. Replies are written to
    `out`, which defaults to stdout.

    Attributes:
        game: The game in progress, replaced by "new".
        out:  Stream receiving protocol replies.
    """

    def __init__(self, out: TextIO | None = None) -> None:
        self.game = Game()
        self.out = out if out is not None else sys.stdout

    def _send(self, line: str) -> None:
        """Write one reply line and flush so a piping client never blocks."""
        print(line, file=self.out, flush=True)

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_new(self, tokens: list[str]) -> None:
        """
        Start a new game.

        Tokens may name a mode ("pvp"/"ai") and a difficulty in any order;
        anything omitted keeps its previous value.
        """
        mode, difficulty = self.game.mode, self.game.difficulty
        for token in tokens:
            if token in {m.value for m in GameMode}:
                mode = GameMode(token)
            elif token in {d.value for d in Difficulty}:
                difficulty = Difficulty(token)
            else:
                raise ValueError(f"unknown option {token!r}")
        self.game = Game(mode=mode, difficulty=difficulty)
        self._send("ok")

    def handle_show(self) -> None:
        for line in str(self.game.position).splitlines():
            self._send(line)
        self._report_state()

    def handle_moves(self, tokens: list[str]) -> None:
        if tokens:
            moves = self.game.moves_for(Square.parse(tokens[0]))
        else:
            moves = self.game.legal()
        self._send(" ".join(["moves"] + [str(m) for m in moves]))

    def handle_move(self, tokens: list[str]) -> None:
        if not tokens:
            raise ValueError("move needs an argument")
        move = Move.parse(tokens[0])
        self.game.play(move)
        self._send(f"played {move}")
        self._report_state()

    def handle_go(self) -> None:
        """Let the engine play one step for the side to move."""
        if self.game.is_over:
            self._report_state()
            return
        side = self.game.turn
        move = self.game.play_ai()
        if move is None:
            _log.info("engine has no move for %s", side.value)
        else:
            self._send(f"played {move}")
        self._report_state()

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _report_state(self) -> None:
        if self.game.winner is not None:
            self._send(f"winner {self.game.winner.value}")
        elif self.game.forced_from is not None:
            self._send(f"continue {self.game.forced_from}")
        else:
            self._send(f"turn {self.game.turn.value}")

    def dispatch(self, line: str) -> bool:
        """
        Run one command line. Returns False when the loop should stop.

        Rule violations and malformed arguments are answered with an
        "error" reply; the loop keeps running either way.
        """
        tokens = line.split()
        if not tokens:
            return True
        command, args = tokens[0], tokens[1:]

        try:
            if command == "new":
                self.handle_new(args)
            elif command == "show":
                self.handle_show()
            elif command == "moves":
                self.handle_moves(args)
            elif command == "move":
                self.handle_move(args)
            elif command == "go":
                self.handle_go()
            elif command == "quit":
                return False
            else:
                _log.warning("ignoring unknown command: %r", command)
        except (IllegalMoveError, ValueError) as exc:
            _log.info("rejected %r: %s", line.strip(), exc)
            self._send(f"error {exc}")
        return True


def run_console_loop(stream: TextIO | None = None, out: TextIO | None = None) -> None:
    """
    Main console loop.

    Reads lines from `stream` (stdin by default) and dispatches each one
    until "quit" is received or the input is exhausted.
    """
    handler = ConsoleHandler(out)
    for raw_line in stream if stream is not None else sys.stdin:
        if not handler.dispatch(raw_line):
            break


def main() -> None:
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    run_console_loop()


if __name__ == "__main__":
    main()
