# Models package: re-export the public models.
# Prefer importing from the specific submodule (e.g. sri_audit.models.audit).

from sri_audit.models.audit import (
    AuditResult as AuditResult,
    ResourceDescriptor as ResourceDescriptor,
)
