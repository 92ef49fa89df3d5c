"""Settings commands."""

import click

from smartspend.cli.formatting import money
from smartspend.utils.amount_parser import parse_amount

ON_OFF = click.Choice(["on", "off"])


@click.group("settings")
def settings_group():
    """View and change settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    settings = ctx.obj["app"].ledger.settings

    def on_off(flag: bool) -> str:
        return "on" if flag else "off"

    click.echo(f"GST:              {on_off(settings.gst_enabled)}")
    click.echo(f"Round-up savings: {on_off(settings.round_up_enabled)}")
    click.echo(f"Private mode:     {on_off(settings.private_mode)}")
    private = settings.private_mode
    click.echo(
        "Monthly budget:   "
        + (money(settings.monthly_budget, private) if settings.monthly_budget else "not set")
    )
    click.echo(
        "Savings goal:     "
        + (money(settings.savings_goal, private) if settings.savings_goal else "not set")
    )


def _toggle(name: str, setter_name: str, label: str):
    @settings_group.command(name)
    @click.argument("state", type=ON_OFF)
    @click.pass_context
    def toggle(ctx, state: str):
        getattr(ctx.obj["app"].ledger, setter_name)(state == "on")
        click.echo(f"{label} turned {state}")

    toggle.help = f"Turn {label.lower()} on or off."
    return toggle


_toggle("gst", "set_gst_enabled", "GST")
_toggle("round-up", "set_round_up_enabled", "Round-up savings")
_toggle("private", "set_private_mode", "Private mode")


def _amount_setting(name: str, setter_name: str, label: str):
    # "-5" is an AMOUNT, not an option
    @settings_group.command(name, context_settings={"ignore_unknown_options": True})
    @click.argument("amount", metavar="AMOUNT")
    @click.pass_context
    def set_amount(ctx, amount: str):
        try:
            value = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

        ledger = ctx.obj["app"].ledger
        getattr(ledger, setter_name)(value)
        stored = getattr(ledger.settings, setter_name.removeprefix("set_"))
        if stored is None:
            click.echo(f"{label} cleared")
        else:
            click.echo(f"{label} set to {money(stored, ledger.settings.private_mode)}")

    set_amount.help = f"Set the {label.lower()}; zero or less clears it."
    return set_amount


_amount_setting("budget", "set_monthly_budget", "Monthly budget")
_amount_setting("goal", "set_savings_goal", "Savings goal")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group)
