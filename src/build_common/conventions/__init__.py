"""Conventions bundled with build-common.

Each module is a pluggy plugin implementing the hooks in
build_common.plugins.hookspecs.
"""
