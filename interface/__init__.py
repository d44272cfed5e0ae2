"""
Interface package: text front ends for the checkers engine.

Modules:
    console - Line-oriented command protocol for terminal play.
              Reads commands from stdin, writes replies to stdout.
              Run as: python -m interface.console
"""
