"""Application services — orchestrate domain logic over the ports."""

from webex_agents.services.ci_runner import CiRunner
from webex_agents.services.dispatcher import Dispatcher
from webex_agents.services.document_pipeline import DocumentPipeline

__all__ = ["CiRunner", "Dispatcher", "DocumentPipeline"]
