from __future__ import annotations

from enum import Enum
from typing import List

import typer

from linkcell import (
    Branch,
    ExclusiveList,
    Leaf,
    LinkcellError,
    MutableDoublyLinkedList,
    OwnerGoneError,
    PersistentList,
    Tree,
    abs_all,
    describe_location,
    shared_suffix,
)
from linkcell.logging import get_logger

from .options import parse_deque_operation, resolve_owner_policy

LOGGER = get_logger("cli")

_HELP = """Demonstrations of linkcell's ownership patterns.

Each command builds a structure from its arguments and prints what the
structure reports back."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


class OwnerPolicy(str, Enum):
    auto = "auto"
    recover = "recover"
    fatal = "fatal"


@app.callback()
def linkcell_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


@app.command("stack")
def stack_command(
    values: List[str] = typer.Argument(..., help="Values to push, in order."),
) -> None:
    """Push VALUES onto an exclusive list, then pop until empty."""

    stack: ExclusiveList[str] = ExclusiveList()
    for value in values:
        stack.push(value)
    typer.echo(f"peek: {stack.peek()}")
    while True:
        popped = stack.pop()
        typer.echo(f"pop: {popped}")
        if popped is None:
            break


@app.command("persistent")
def persistent_command(
    values: List[str] = typer.Argument(..., help="Values of the base list, head first."),
    prepend: str = typer.Option(None, "--prepend", help="Value prepended onto the base list's tail."),
) -> None:
    """Show structural sharing between a persistent list and derived views."""

    base = PersistentList.from_iterable(values)
    typer.echo(f"list: {list(base)}")
    typer.echo(f"head: {base.head()}")
    tail = base.tail()
    typer.echo(f"tail: {list(tail)}")
    if prepend is not None:
        branch = tail.prepend(prepend)
        typer.echo(f"branch: {list(branch)}")
        typer.echo(f"shared nodes: {shared_suffix(base, branch)}")


@app.command("deque")
def deque_command(
    operations: List[str] = typer.Argument(
        ..., help="Operations such as push_front:1, push_back:2, pop_front, peek_back."
    ),
) -> None:
    """Apply OPERATIONS to a doubly-linked list and print each result."""

    try:
        parsed = [parse_deque_operation(token) for token in operations]
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="OPERATIONS") from exc

    deque: MutableDoublyLinkedList[str] = MutableDoublyLinkedList()
    for operation in parsed:
        method = getattr(deque, operation.name)
        if operation.value is not None:
            method(operation.value)
            continue
        result = method()
        if operation.name.startswith("peek") and result is not None:
            with result as guard:
                result = guard.value
        typer.echo(f"{operation.name}: {result}")
    try:
        deque.validate()
    except LinkcellError as exc:
        typer.echo(f"invalid: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(f"remaining: {deque.values()}")


@app.command("tree")
def tree_command(
    tree_id: str = typer.Option("tree", "--tree-id", help="Identifier of the owning tree."),
    branch_ids: List[str] = typer.Option(["branch"], "--branch", "-b", help="Branch identifiers."),
    leaf_ids: List[str] = typer.Option([], "--leaf", "-l", help="Leaves added to the first branch."),
    drop_tree: bool = typer.Option(False, "--drop-tree", help="Destroy the tree before resolving again."),
    policy: OwnerPolicy = typer.Option(OwnerPolicy.auto, "--policy", help="Owner-gone handling."),
) -> None:
    """Print branch and leaf locations, optionally after the tree is gone."""

    if leaf_ids and not branch_ids:
        raise typer.BadParameter("leaves need at least one --branch", param_hint="--leaf")
    effective_policy = resolve_owner_policy(policy.value)

    tree = Tree(tree_id)
    branches = [tree.add_branch(Branch(ident)) for ident in branch_ids]
    leaves = [branches[0].add_leaf(Leaf(ident)) for ident in leaf_ids]
    nodes = [*branches, *leaves]
    for node in nodes:
        typer.echo(node.location())

    if not drop_tree:
        return
    del tree
    LOGGER.debug("Tree '%s' dropped with %d node(s) still referenced.", tree_id, len(nodes))
    typer.echo("tree dropped")
    for node in nodes:
        try:
            location = describe_location(node, policy=effective_policy)
        except OwnerGoneError as exc:
            typer.echo(f"fatal: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        typer.echo(location if location is not None else f"{node.id}: owner gone")


@app.command("cow")
def cow_command(
    values: List[int] = typer.Argument(..., help="Integers; separate negatives with '--'."),
) -> None:
    """Take absolute values, copying only when something is negative."""

    result = abs_all(values)
    kind = "owned" if result.is_owned else "borrowed"
    typer.echo(f"{kind}: {result.value.tolist()}")


def main() -> None:
    app()


__all__ = ["app", "main"]
