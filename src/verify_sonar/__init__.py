"""verify-sonar - scan files with SonarQube for IDE from the command line."""

__version__ = "0.1.0"
