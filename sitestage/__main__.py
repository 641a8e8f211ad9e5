"""支持 python -m sitestage"""

from .cli.main import app

if __name__ == "__main__":
    app()
