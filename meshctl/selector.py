from __future__ import annotations

from typing import List

import typer

from meshctl.errors import SelectionError


def parse_choice(value: str, count: int) -> int:
    """
    Parses a 1-indexed choice and returns the matching 0-based index.

    Raises:
        ValueError: If the value is not an integer between 1 and count.
    """
    try:
        choice = int(value.strip())
    except ValueError:
        raise ValueError(f"'{value}' is not a number") from None
    if not 1 <= choice <= count:
        raise ValueError(f"Choice must be between 1 and {count}")
    return choice - 1


def choose_context(contexts: List[str], max_attempts: int = 3) -> str:
    """
    Picks the context to activate.

    A single context is returned without prompting. When there are more, the
    contexts are listed and the operator enters the number of one of them.
    Invalid input is rejected and prompted for again, up to `max_attempts` times.

    Args:
        contexts (List[str]): The discovered contexts, in display order.
        max_attempts (int, optional): How many answers to accept. Defaults to 3.

    Returns:
        str: The chosen context.

    Raises:
        SelectionError: If there is no context or no valid choice was entered.
    """
    if not contexts:
        raise SelectionError("No contexts found in the kubeconfig")

    if len(contexts) == 1:
        return contexts[0]

    typer.echo("List of available contexts : ")
    for i, ctx in enumerate(contexts, start=1):
        typer.echo(f"({i}) {ctx}")

    for _ in range(max_attempts):
        try:
            answer = typer.prompt("Enter choice", type=str)
        except typer.Abort:
            raise SelectionError("No context chosen") from None
        try:
            return contexts[parse_choice(answer, len(contexts))]
        except ValueError as e:
            typer.echo(f"Invalid choice: {e}", err=True)

    raise SelectionError(f"No valid choice after {max_attempts} attempts")
