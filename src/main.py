import uvicorn

from infra.web.app import create_app

if __name__ == "__main__":
    app = create_app()

    uvicorn.run(
        app=app,
        host=app.state.host,
        port=app.state.port,
        access_log=False,
        log_config=None,
    )
