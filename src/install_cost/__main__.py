# src/install_cost/__main__.py
from install_cost.main import cli

if __name__ == "__main__":
    cli()
