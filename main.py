from rich.pretty import pprint

from progparams import *

__prog__ = "overview"

params = Params(shell=True, usage="overview [-a] [-c <count>] [-i <interval>] <destination>")
params.add(bool, "-a")
params.add(Kind.SIZE, "-c", "--count", default=10)
params.add(float, "-i", "--interval", default=1.0)
params.add(str, "destination", required=True)


if __name__ == '__main__':
    invoke(params)
    pprint({
        "audible": params.get("-a", bool),
        "count": params.get("--count", Kind.SIZE),
        "interval": params.get("--interval", float),
        "destination": params.get("destination", str),
    })
