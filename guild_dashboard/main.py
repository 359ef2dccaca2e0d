"""Process entrypoint: ``uvicorn guild_dashboard.main:app`` or ``python -m guild_dashboard.main``."""

from guild_dashboard.app import Application

application = Application()
app = application.app

if __name__ == "__main__":
    application.run()
