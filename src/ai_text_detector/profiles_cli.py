from __future__ import annotations

import json

import click

from .languages import GROUP_NAMES, load_profile_table, normalize_language_code


@click.group(name="profiles")
def profiles_group() -> None:
    """Inspect the bundled language profiles."""


@profiles_group.command("list")
def list_profiles() -> None:
    """List every language profile with its display name."""
    table = load_profile_table()
    for language, profile in table.profiles.items():
        suffix = " (fallback)" if profile.is_fallback else ""
        click.echo(f"{language.value}\t{profile.name}{suffix}")


@profiles_group.command("show")
@click.argument("code")
def show_profile(code: str) -> None:
    """Print the phrase groups and weights of one profile as JSON."""
    table = load_profile_table()
    language = normalize_language_code(code)
    profile = table.profiles.get(language) if language is not None else None
    if profile is None:
        raise click.BadParameter(f"No profile for language {code!r}", param_hint="CODE")

    payload = {
        "code": profile.code,
        "name": profile.name,
        "fallback": profile.is_fallback,
        "groups": {
            name: {
                "weight": profile.group(name).weight,
                "phrases": list(profile.group(name).phrases),
            }
            for name in GROUP_NAMES
        },
        "fingerprint": dict(profile.fingerprint),
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    profiles_group()
