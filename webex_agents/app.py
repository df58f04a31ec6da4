"""FastAPI application wiring and startup."""

import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from webex_agents.adapters.browser import session_factory
from webex_agents.adapters.jenkins import JenkinsClient
from webex_agents.adapters.llm import OllamaTranslator
from webex_agents.adapters.web import webhook_router
from webex_agents.adapters.webex import WebexClient
from webex_agents.config import AppConfig, __version__
from webex_agents.domain.step_executor import StepExecutor
from webex_agents.services import CiRunner, Dispatcher, DocumentPipeline


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_dispatcher(config: AppConfig) -> Dispatcher:
    """Wire the real adapters into a Dispatcher."""
    webex = WebexClient(config.webex)
    return Dispatcher(
        config=config,
        messaging=webex,
        ci_runner=CiRunner(JenkinsClient(config.jenkins), config.jenkins),
        document_pipeline=DocumentPipeline(
            messaging=webex,
            translator=OllamaTranslator(config.translator),
            executor=StepExecutor(session_factory(config.browser)),
            download_dir=config.download_dir,
        ),
    )


def create_app(config: Optional[AppConfig] = None, dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    config = config or AppConfig.from_env()
    app = FastAPI(title="Webex AI Agents", version=__version__)
    app.state.config = config
    app.state.dispatcher = dispatcher or build_dispatcher(config)
    app.include_router(webhook_router)

    @app.on_event("startup")
    async def startup_event():
        _log("Webex AI Agents webhook starting")
        _log(f"Jenkins: {config.jenkins.url} (allowed jobs: {', '.join(config.jenkins.allowed_jobs)})")
        if not config.webex.bot_token:
            _log("WEBEX_BOT_TOKEN not configured — replies will fail (set it in .env)")
        if not config.webex.bot_id:
            _log("WEBEX_BOT_ID not configured — falling back to e-mail domain for loop prevention")
        _log(f"Listening on http://localhost:{config.port}")

    return app


def main():
    config = AppConfig.from_env()
    uvicorn.run(create_app(config), host="0.0.0.0", port=config.port, log_level="info")


if __name__ == "__main__":
    main()
