"""Process launching gateway."""

from gitloom.gateway.process.abc import ProcessRunner
from gitloom.gateway.process.fake import FakeProcessRunner, RunCall
from gitloom.gateway.process.real import RealProcessRunner

__all__ = [
    "ProcessRunner",
    "RealProcessRunner",
    "FakeProcessRunner",
    "RunCall",
]
