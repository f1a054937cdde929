"""Entry point: python -m effluent_report"""

from effluent_report.cli.app import app

if __name__ == "__main__":
    app()
