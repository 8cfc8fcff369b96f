"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services validate input against existing records, call repositories and
raise HTTP errors from ``erp_hub.utils.exceptions``. Routes own the commit,
except for attachment uploads whose status transitions commit in the service.
"""
