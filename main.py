from enum import Enum

from rich.pretty import pprint

from argschema import *


class Mode(Enum):
    fast = 1
    safe = 2


@schema(switches={"verbose": "v", "jobs": "j"})
class Config:
    verbose: bool
    name: str | None
    jobs: u8 = 1
    mode: Mode = Mode.safe


if __name__ == '__main__':
    pprint(run(Config))
