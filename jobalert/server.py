"""
HTTP control surface
Readiness text, status probe and manual trigger.
"""

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse

from .scheduler import JobScheduler


def create_app(scheduler: JobScheduler) -> FastAPI:
    app = FastAPI(title="Job Alert Bot")

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "Job Alert Bot is running. Use /status or /trigger"

    @app.get("/status")
    def status():
        return scheduler.status()

    @app.get("/trigger")
    async def trigger():
        # The cycle blocks on HTTP and sleeps, keep it off the event loop
        sent = await run_in_threadpool(scheduler.trigger, 'manual')
        if sent is None:
            return JSONResponse(
                status_code=409,
                content={'ok': False, 'sent': 0, 'error': 'cycle already running'},
            )
        return {'ok': True, 'sent': sent}

    return app
