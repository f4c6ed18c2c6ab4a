"""Online compiler core.

This package implements the "online compiler" feature of the learning app:
the user picks a language, edits a program, optionally types stdin, and the
program is sent to a remote judge service whose result is shown back.

The top-level modules include:

* ``config`` – configuration handling for environment variables.
* ``exceptions`` – errors raised by the core.
* ``languages`` – the language catalog and starter programs.
* ``stdin`` – heuristic deciding whether a program needs standard input.
* ``models`` – Pydantic models for the judge wire format and the API.
* ``judge`` – clients that submit programs to the remote judge.
* ``session`` – the editor session state machine.
* ``api`` – FastAPI application hosting editor sessions.
"""
