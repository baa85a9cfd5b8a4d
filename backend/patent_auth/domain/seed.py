"""Seed aggregate returned when no document has been persisted yet."""

from collections.abc import Callable

from patent_auth.domain.entities import AppData, PatentConfig, Project, User, UserRole

SEED_PATENT_NAME = "高效太阳能光伏转换装置"
SEED_PATENT_NO = "CN-2024-98765432"


def build_seed_data(hash_credential: Callable[[str], str]) -> AppData:
    """Build a fresh seed aggregate.

    Every call constructs new objects, so two seeds never share state.
    Credentials are passed through ``hash_credential`` before storage.
    """
    return AppData(
        users=(
            User(
                id="admin",
                username="admin",
                password=hash_credential("admin"),
                company_name="系统管理员",
                credits=0,
                role=UserRole.ADMIN,
            ),
            User(
                id="user1",
                username="tech_corp",
                password=hash_credential("123"),
                company_name="未来科技股份有限公司",
                credits=1000,
                role=UserRole.USER,
            ),
        ),
        projects=(
            Project(id="p1", name="商业授权 - A类", cost=500),
            Project(id="p2", name="研发与实验使用", cost=200),
            Project(id="p3", name="教育展示用途", cost=50),
        ),
        certificates=(),
        config=PatentConfig(
            patent_name=SEED_PATENT_NAME,
            patent_no=SEED_PATENT_NO,
            background_url="",
        ),
        current_user=None,
    )
