import logging

audit_logger = logging.getLogger("pos_register.audit")

def write_log(*, action, resource, status="SUCCESS", meta=None):
    entry = {"action": action, "resource": resource, "status": status, "meta": meta or {}}
    audit_logger.info("%s %s %s %s", action, resource, status, entry["meta"], extra={"audit": entry})
