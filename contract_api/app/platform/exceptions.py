class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class PermissionDenied(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} permission denied")
        self.resource = resource

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class ServiceUnavailable(DomainError):
    """외부 저장소(OpenSearch, RDB)에 접근할 수 없는 경우"""
    def __init__(self, service: str, reason: str):
        super().__init__(f"{service} unavailable: {reason}")
        self.service = service

class IndexUnavailable(ServiceUnavailable):
    def __init__(self, index_name: str, reason: str):
        super().__init__(f"index '{index_name}'", reason)
        self.index_name = index_name

class LookupUnavailable(ServiceUnavailable):
    def __init__(self, reason: str):
        super().__init__("lookup database", reason)

class DecodeError(DomainError):
    """
    검색 결과 1건(hit)이 기대한 형태가 아닐 때.
    배치 전체가 아니라 해당 hit만 건너뛰는 용도로 사용한다.
    """
    def __init__(self, hit_id: str | None, reason: str):
        super().__init__(f"cannot decode hit {hit_id or '?'}: {reason}")
        self.hit_id = hit_id
        self.reason = reason
