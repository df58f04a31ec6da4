"""Jenkins CI adapter."""

from webex_agents.adapters.jenkins.client import JenkinsClient

__all__ = ["JenkinsClient"]
