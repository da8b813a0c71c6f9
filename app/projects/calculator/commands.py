import click

from app.projects.calculator.core.calculator import Calculator


@click.group(name='calculator')
def calculator_cli():
    """Calculator project commands."""
    pass


@calculator_cli.command('press')
@click.argument('tokens', nargs=-1, required=True)
def press_command(tokens):
    """Feed input tokens through the calculator, echoing each display.

    Example: flask calculator press 1 2 '*' 3 =
    """
    calculator = Calculator(on_display=click.echo)
    for token in tokens:
        if calculator.press(token) is None:
            raise click.UsageError(f"Unrecognized input: {token}")
    click.echo(f"Result: {calculator.display}")
