from typing import List

from pydantic_settings import BaseSettings


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./portal.db"
    sql_echo: bool = False
    # 개발용: 시작 시 테이블 생성 (운영은 alembic upgrade head)
    create_tables_on_startup: bool = False

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # 오브젝트 스토리지 (버킷 = 하위 디렉터리)
    storage_root: str = "./storage"
    storage_public_url: str = "/storage"

    # 쉼표로 구분된 목록
    admin_emails: str = ""
    cors_origins: str = "*"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def admin_email_list(self) -> List[str]:
        return [email.lower() for email in _split_csv(self.admin_emails)]

    @property
    def cors_origin_list(self) -> List[str]:
        return _split_csv(self.cors_origins) or ["*"]


settings = Settings()
