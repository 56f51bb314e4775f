"""
Switchyard help rendering.

render(command, console) prints a command's help with rich:
- usage line synthesized from the route, flags, arguments and children,
- description paragraph,
- children table (commands at the root, subcommands below),
- flags and arguments sections.

helper(ctx) is the handler behind Command.help(): it describes the parent of
the help command, or the descendant named by its positional tokens.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.table import Table
from rich.text import Text


def _styles():
    return defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Sections / entries ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "flag-name": "bold #22C55E",  # GREEN for boolean flags
        "option-name": "bold #00E6FF",  # CYAN for valued flags
        "metavar": "bold #FFD600",  # AMBER for values
        "multiple-metavar": "bold italic #FFD600",

        # === Children table ===
        "children-title": "bold #FFFFFF",
        "children-table": "#4B5563",  # Slate border
        "children": "bold #36C5F0",  # Sky-blue subcommands
        "children-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _names(flag, styles):
    style = styles["flag-name" if flag.boolean else "option-name"]
    spellings = sorted(flag.names, key=len)
    return Text(", ").join(
        Text(("-" if len(name) == 1 else "--") + name, style) for name in spellings
    )


def _metavar(argument, styles):
    if argument.multiple:
        return Text.assemble("[", Text("<%s>" % argument.name, styles["multiple-metavar"]), " ...]")
    return Text("<%s>" % argument.name, styles["metavar"])


def render(command, console, /):
    """
    Print the help of a command on a rich console.
    """
    styles = _styles()
    renders = []

    flags = [flag for flag in command.flags if not flag.hidden]
    arguments = [argument for argument in command.arguments if not argument.hidden]

    # Usage line: route, flags, arguments, then the child slot
    usage = Text()
    usage.append("usage", styles["usage-label"]).append(": ")
    usage.append(command.route, styles["program-name"])
    for flag in flags:
        usage.append(" [").append(_names(flag, styles))
        if not flag.boolean:
            usage.append(" ").append("<value>", styles["metavar"])
        usage.append("]")
    for argument in arguments:
        usage.append(" ").append(_metavar(argument, styles))
    if command.children:
        usage.append(" <command>" if command.handler is None else " [<command>]")
    renders.append(usage)

    if command.descr:
        renders.append(Text("\n") + Text(str(command.descr), styles["description-section"]))

    if command.children:
        table = Table(
            "name", "help",
            title=Text("subcommands" if command.parent else "commands", styles["children-title"]),
            box=ROUNDED,
            style=styles["children-table"],
            header_style=styles["children-title"],
        )
        for name, child in command.children.items():
            if child.descr:
                help = Text(str(child.descr), styles["children-description"])
            else:
                help = Text("no description", styles["children-description"])
            table.add_row(Text(name, styles["children"]), help)
        renders.append(Text(""))
        renders.append(table)

    for label, entries in (
        ("flags", [(_names(flag, styles) + (Text("") if flag.boolean else Text(" <value>", styles["metavar"])),
                    flag.descr) for flag in flags]),
        ("arguments", [(_metavar(argument, styles), argument.descr) for argument in arguments]),
    ):
        if not entries:
            continue
        grid = Table.grid(padding=(0, 2))
        grid.add_column(no_wrap=True)
        grid.add_column()
        for name, descr in entries:
            grid.add_row(Text("  ") + name, Text(str(descr or ""), styles["argument-description"]))
        renders.append(Text(""))
        renders.append(Text(label, styles["group-label"]) + Text(":"))
        renders.append(grid)

    console.print(Group(*renders))


def helper(context, /):
    """
    show help for a command or one of its subcommands
    """
    command = context.command
    target, remaining = (command.parent or command).resolve(context.argument("command", ()))
    if remaining:
        print("no subcommand %r under '%s'" % (remaining[0], target.route), file=context.stderr)
    render(target, context.console)


__all__ = (
    "render",
    "helper",
)
