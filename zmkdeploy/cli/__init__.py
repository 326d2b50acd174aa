"""Command line interface for zmk-deploy.

The typer application lives in ``zmkdeploy.cli.app``.
"""
