"""Command line interface for the quorum gate."""

from __future__ import annotations

import json
import logging
import sys

import click

from quorum_gate.audit import AuditTrail
from quorum_gate.errors import QuorumGateError
from quorum_gate.gate import ShareGate
from quorum_gate.policy import load_policy
from quorum_gate.scenario import ScenarioError, load_scenario, run_scenario
from quorum_gate.shamir import reconstruct, split_secret


def _parse_point(text: str) -> tuple[int, int]:
    try:
        x, y = text.split(":", 1)
        return int(x), int(y)
    except ValueError:
        raise click.BadParameter(f"expected X:Y, got {text!r}")


def _fail(exc: QuorumGateError) -> None:
    click.echo(f"error[{exc.code}]: {exc}", err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Threshold secret-sharing gate."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("reconstruct")
@click.argument("points", nargs=-1, required=True)
@click.option("--prime", type=int, default=None, help="Field prime (default from policy).")
def reconstruct_cmd(points: tuple[str, ...], prime: int | None) -> None:
    """Interpolate POINTS (X:Y) at zero."""
    field_prime = prime or load_policy().prime
    try:
        secret = reconstruct([_parse_point(p) for p in points], field_prime)
    except QuorumGateError as exc:
        _fail(exc)
    click.echo(secret)


@main.command()
@click.option("--yes", "yes_votes", type=int, default=3, show_default=True, help="Number of yes votes.")
@click.option("--c1", type=int, default=5, show_default=True)
@click.option("--c2", type=int, default=9, show_default=True)
@click.option("--execute/--no-execute", default=True, show_default=True)
@click.option("--audit-dir", type=click.Path(file_okay=False), default=None)
def demo(yes_votes: int, c1: int, c2: int, execute: bool, audit_dir: str | None) -> None:
    """Run the reference five-participant scenario."""
    policy = load_policy()
    audit = AuditTrail(audit_dir) if audit_dir else None
    gate = ShareGate("dealer", policy=policy, audit=audit)
    coefficients = [policy.expected_secret, c1, c2][: policy.threshold]
    coefficients += [0] * (policy.threshold - len(coefficients))
    try:
        gate.configure(coefficients, caller="dealer")
        shares = split_secret(
            coefficients[0], coefficients[1:], range(1, policy.total_participants + 1), policy.prime
        )
        for index, share in enumerate(shares):
            gate.issue_share(f"voter-{index + 1}", share.x, share.y)
        for index in range(policy.total_participants):
            gate.submit_vote(f"voter-{index + 1}", index < yes_votes)
        approved = gate.evaluate()
        click.echo(f"yes votes: {gate.state.yes_count}/{gate.state.total_count}")
        click.echo("upgrade approved" if approved else "upgrade rejected")
        if execute and approved:
            click.echo(gate.execute_transition())
    except QuorumGateError as exc:
        _fail(exc)


@main.command()
@click.argument("scenario", type=click.Path(exists=True, dir_okay=False))
@click.option("--audit-dir", type=click.Path(file_okay=False), default=None)
def run(scenario: str, audit_dir: str | None) -> None:
    """Replay a SCENARIO file and print the final state as JSON."""
    try:
        result = run_scenario(load_scenario(scenario), audit=AuditTrail(audit_dir) if audit_dir else None)
    except ScenarioError as exc:
        raise click.ClickException(str(exc))
    click.echo(json.dumps(result.summary(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
