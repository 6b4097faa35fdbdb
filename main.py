from dataclasses import dataclass
from pathlib import Path

from rich.pretty import pprint

from commandeer import *


@dataclass
class Copy:
    sources: list[Path]
    target: Path
    jobs: int | None = None
    verbose: bool = False


def copy(result):
    pprint(from_parsed(Copy, result))


program = Program(
    "files",
    commands=[
        Command(
            "copy",
            arguments=[argument("<sources...>", descr="files to copy")],
            options=[
                option("-t, --target <dir>", required=True, descr="destination directory"),
                option("-j, --jobs <count>", descr="number of parallel copies"),
                option("-v, --verbose", descr="print each copied file"),
            ],
            descr="copy files into a directory",
            action=copy,
        ),
        Command("status", options=[option("--short", descr="one line per file")], descr="show pending copies"),
    ],
    descr="file utilities",
    version=__version__,
    shell=True,
    fancy=True,
    colorful=True,
)


if __name__ == '__main__':
    pprint(program.run())
