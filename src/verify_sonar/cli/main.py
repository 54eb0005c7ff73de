"""
verify-sonar CLI
Main entry point for the command-line interface

Usage:
    verify-sonar                   # Scan outstanding git changes
    verify-sonar src/ app.ts       # Scan files and directories
    verify-sonar --port-start 64120 --port-end 64125
"""

import typer

from verify_sonar.cli.commands import scan

app = typer.Typer(
    name="verify-sonar",
    help="Scan code with SonarQube for IDE's embedded analysis service",
    add_completion=False,
)

# Single command: typer runs it without a subcommand name
app.command()(scan.run)


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
