"""Build helpers: file placement, bundlers, run logging."""

from appendsw.build.esbuild_bundler import EsbuildBundler


def register_builtin_bundlers(registry) -> None:
    """Register built-in bundlers on the given registry."""
    registry.register_bundler("esbuild", EsbuildBundler)


__all__ = [
    "EsbuildBundler",
    "register_builtin_bundlers",
]
