"""regscan: regulatory accessibility scanning for WCAG, EN 301 549 and national law."""

__all__ = ["app", "main"]


def __getattr__(name: str):
    # Deferred so importing a submodule does not pull in typer and rich
    if name in __all__:
        from regscan import cli

        return getattr(cli, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(__all__)
