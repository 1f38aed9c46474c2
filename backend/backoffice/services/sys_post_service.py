"""
岗位模块业务层
backend/backoffice/services/sys_post_service.py
"""
from uuid import UUID

from backoffice.core.exceptions import Conflict, ResourceNotFound
from backoffice.repositories.sys_post_repository import PostRepository
from backoffice.schemas.responses import PageResult
from backoffice.schemas.sys_post import PostCreate, PostOut, PostQuery, PostUpdate
from backoffice.utils.field_mapper import to_create_fields, to_update_fields


class PostService:
    def __init__(self, post_repository: PostRepository):
        self.post_repository = post_repository

    async def _ensure_unique_code(self, code: str, session) -> None:
        if await self.post_repository.get_by_code(code, session):
            raise Conflict(f"岗位编码已存在：{code}")

    async def create(self, post_in: PostCreate) -> PostOut:
        async with self.post_repository.transaction() as session:
            await self._ensure_unique_code(post_in.code, session)
            post = await self.post_repository.add(to_create_fields(post_in), session)
        return PostOut.model_validate(post)

    async def delete(self, post_id: UUID) -> None:
        async with self.post_repository.transaction() as session:
            if not await self.post_repository.delete_by_id(post_id, session):
                raise ResourceNotFound(f"岗位不存在：{post_id}")

    async def find_one(self, post_id: UUID) -> PostOut:
        post = await self.post_repository.get_by_id(post_id)
        if not post:
            raise ResourceNotFound(f"岗位不存在：{post_id}")
        return PostOut.model_validate(post)

    async def find_with_pagination(self, query: PostQuery) -> PageResult[PostOut]:
        posts, total = await self.post_repository.find_page(
            {"name": query.name, "code": query.code},
            query.created_at_range(),
            query.offset,
            query.page_size,
        )
        return PageResult[PostOut].build(
            [PostOut.model_validate(post) for post in posts], total, query.current, query.page_size
        )

    async def update(self, post_id: UUID, post_in: PostUpdate) -> PostOut:
        async with self.post_repository.transaction() as session:
            post = await self.post_repository.get_by_id(post_id, session)
            if not post:
                raise ResourceNotFound(f"岗位不存在：{post_id}")
            data = to_update_fields(post_in)
            if "code" in data and data["code"] != post.code:
                await self._ensure_unique_code(data["code"], session)
            await self.post_repository.update(post, data, session)
        return PostOut.model_validate(post)
