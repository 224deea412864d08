import json
from enum import StrEnum

import yaml
from rich.console import Console
from rich.table import Table

from helmsman import *

__prog__ = "demo"

RESOURCE_TYPE = "resource-type"
OUTPUT = "output"


class ResourceType(StrEnum):
    PROCESS = "process"
    GROUP = "group"


PROCESSES = {
    "sshd": {"name": "sshd", "invocation": "/usr/sbin/sshd", "id": 3838},
    "database": {"name": "database", "invocation": "/etc/db/db", "id": 489437},
    "db-watcher": {"name": "db-watcher", "invocation": "/etc/db/db-watch", "id": 23733},
    "db-pool": {"name": "db-pool", "invocation": "/etc/db/db-pool", "id": 3453},
}

GROUPS = [
    {"name": "sshd", "processes": [PROCESSES["sshd"]]},
    {"name": "db", "processes": [PROCESSES["database"], PROCESSES["db-watcher"], PROCESSES["db-pool"]]},
]

ANIMALS = []


def emit(stdout, output, payload, table):
    match output:
        case "json":
            print(json.dumps(payload), file=stdout)
        case "yaml":
            print(yaml.safe_dump(payload, sort_keys=False), end="", file=stdout)
        case _:
            Console(file=stdout, highlight=False, soft_wrap=True).print(table)


@command(
    arguments=[
        Argument(RESOURCE_TYPE, descr="type of resource to locate", choices=ResourceType),
    ],
    flags=[
        Flag(OUTPUT, "o", str, descr="command output format", default="table", choices=("json", "yaml", "table")),
    ],
)
def get(node, args, captured, stdout):
    """get information about a resource"""
    if args.getstring(RESOURCE_TYPE) == ResourceType.PROCESS:
        table = Table("PID", "NAME", "INVOCATION", box=None, header_style="bold")
        for process in PROCESSES.values():
            table.add_row(str(process["id"]), process["name"], process["invocation"])
        emit(stdout, args.getstring(OUTPUT), list(PROCESSES.values()), table)
    else:
        table = Table("GROUP", "PID", "PROCESS", box=None, header_style="bold")
        for group in GROUPS:
            for process in group["processes"]:
                table.add_row(group["name"], str(process["id"]), process["name"])
        emit(stdout, args.getstring(OUTPUT), GROUPS, table)


farm = Command("farm", descr="interact with the farm")


@farm.command(flags=[Flag("sort", "s", str, descr="sort order", choices=("name", "type"), default="name")])
def inventory(node, args, captured, stdout):
    """obtain animal inventory"""
    key = args.getstring("sort")
    for animal in sorted(ANIMALS, key=lambda animal: animal[key]):
        print(f"{animal['name']:<20}{animal['type']}", file=stdout)


@farm.command(
    arguments=[Argument("name", descr="name of the animal")],
    flags=[Flag("type", "t", descr="type of animal", choices=("mammal", "bird", "reptile"), required=True)],
)
def add(node, args, captured, stdout):
    """add an animal to the farm"""
    ANIMALS.append({"name": args.getstring("name"), "type": args.getstring("type")})
    print(f"added {args.getstring('type')} {args.getstring('name')!r}", file=stdout)


if __name__ == '__main__':
    Commander(Config([get, farm], prompt="demo » ", prog=__prog__, loglevel="WARNING")).run()
