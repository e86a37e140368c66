"""Application-level dependency providers."""

from litestar.datastructures import State

from imeliq.audit import AuditLogger
from imeliq.config import Settings


def provide_settings(state: State) -> Settings:
    return state.settings


def provide_audit_log(state: State) -> AuditLogger:
    return state.audit_log
