"""공통 Pydantic 스키마 — camelCase JSON 기반 클래스.

Common Pydantic schema base classes.
Wire format is camelCase; Python attributes stay snake_case.
Request bodies accept either spelling, responses are always camelCase.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase alias 기반 모델 — ORM 객체에서 직접 생성 가능."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """단순 성공 메시지 응답."""

    success: bool = True
    message: str
