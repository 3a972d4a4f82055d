from app.logging import configure_logging
from app.factory import create_app

configure_logging()
app = create_app()


@app.on_event("shutdown")
def _on_shutdown():
    app.state.db.dispose()
