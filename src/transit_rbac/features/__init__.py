"""Features of transit-rbac: permissions and audit."""
