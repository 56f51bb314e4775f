import logging
import os
import sys

from switchyard import *

__prog__ = "remotes"

root = Command("remotes", "keep track of named remote urls")
root.add(root.help())

REMOTES = {}


@root.command(
    flags=[Flag("fetch", "f", boolean=True, descr="fetch right after adding")],
    arguments=[Argument("name", descr="remote name"), Argument("urls", multiple=True, descr="one or more urls")],
)
def add(ctx):
    """register a remote"""
    REMOTES[ctx.argument("name")] = ctx.argument("urls", ())
    if ctx.flag("fetch", "false") == "true":
        print("fetching", ctx.argument("name"), file=ctx.stdout)


@root.command(flags=[Flag("limit", "n", descr="show at most this many")])
def show(ctx):
    """list registered remotes"""
    limit = convert.integer(ctx.flag("limit", str(len(REMOTES))))
    for name in sorted(REMOTES)[:limit]:
        print(name, " ".join(REMOTES[name]), file=ctx.stdout)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG if "SWITCHYARD_DEBUG" in os.environ else logging.WARNING)
    sys.exit(invoke(App(root, colorful=True)))
