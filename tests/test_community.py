"""Tests for lesson discussions and student blog posts."""

import pytest

from academy.application.common.pagination import Pagination
from academy.core import Container
from academy.domain.catalog.exceptions import LessonNotFoundError
from academy.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from academy.domain.community.entities.blog_post import BlogPostStatus
from academy.domain.community.events import BlogPostStatusChanged
from academy.domain.community.exceptions import (
    CrossLessonReplyError,
    DiscussionNotFoundError,
    PostNotEditableError,
)
from academy.domain.identity.exceptions import UserNotFoundError


class TestDiscussions:
    def test_reply_with_parent_from_another_lesson_is_rejected(
        self, container: Container, course_id: int, lesson_id: int
    ) -> None:
        other_lesson = container.lesson_use_case().add_lesson(course_id, 2, "Lesson B")
        discussions = container.discussion_use_case()
        parent = discussions.create_discussion(other_lesson.id.value, "Question on B")

        with pytest.raises(ValidationError) as exc_info:
            discussions.create_reply(lesson_id, parent.id.value, "Answer posted on A")

        assert isinstance(exc_info.value, CrossLessonReplyError)
        assert discussions.get_thread(lesson_id) == []

    def test_thread_is_built_in_creation_order(
        self, container: Container, lesson_id: int
    ) -> None:
        discussions = container.discussion_use_case()
        first = discussions.create_discussion(lesson_id, "First question")
        second = discussions.create_discussion(lesson_id, "Second question")
        reply = discussions.create_reply(lesson_id, first.id.value, "An answer")
        nested = discussions.create_reply(lesson_id, reply.id.value, "A follow-up")
        late = discussions.create_reply(lesson_id, first.id.value, "Another answer")

        forest = discussions.get_thread(lesson_id)

        assert [node.discussion.id for node in forest] == [first.id, second.id]
        assert [d.id for d in forest[0].walk()] == [first.id, reply.id, nested.id, late.id]
        assert forest[1].replies == []

    def test_reply_to_unknown_parent(self, container: Container, lesson_id: int) -> None:
        with pytest.raises(DiscussionNotFoundError):
            container.discussion_use_case().create_reply(lesson_id, 999, "Hello?")

    def test_empty_body_is_rejected(self, container: Container, lesson_id: int) -> None:
        with pytest.raises(ValidationError):
            container.discussion_use_case().create_discussion(lesson_id, "   ")

    def test_discussion_on_unknown_lesson(self, container: Container) -> None:
        with pytest.raises(LessonNotFoundError):
            container.discussion_use_case().create_discussion(555, "Anyone here?")


class TestBlogPosts:
    def test_moderation_publishes_post(
        self, container: Container, notifier, user_id: int
    ) -> None:
        posts = container.blog_post_use_case()
        post = posts.create_post(user_id, "My first week", "It went well.")
        assert post.status is BlogPostStatus.CREATED

        posts.submit_for_moderation(post.id.value)
        published = posts.moderate_post(post.id.value, "publish")

        assert published.status is BlogPostStatus.PUBLISHED
        changes = [(e.previous, e.current) for e in notifier.of_type(BlogPostStatusChanged)]
        assert changes == [("created", "in_moderation"), ("in_moderation", "published")]

    def test_moderation_can_archive(self, container: Container, user_id: int) -> None:
        posts = container.blog_post_use_case()
        post = posts.create_post(user_id, "Draft", "Not ready")
        posts.submit_for_moderation(post.id.value)

        archived = posts.moderate_post(post.id.value, "archive")

        assert archived.status is BlogPostStatus.ARCHIVED
        with pytest.raises(InvalidStatusTransitionError):
            posts.archive_post(post.id.value)

    def test_moderating_a_draft_fails(self, container: Container, user_id: int) -> None:
        posts = container.blog_post_use_case()
        post = posts.create_post(user_id, "Draft", "Not submitted")

        with pytest.raises(InvalidStatusTransitionError):
            posts.moderate_post(post.id.value, "publish")

    def test_unknown_decision_is_rejected(self, container: Container, user_id: int) -> None:
        posts = container.blog_post_use_case()
        post = posts.create_post(user_id, "Draft", "Body")
        posts.submit_for_moderation(post.id.value)

        with pytest.raises(ValidationError):
            posts.moderate_post(post.id.value, "delete")
        assert posts.get_post(post.id.value).status is BlogPostStatus.IN_MODERATION

    def test_submitted_post_is_not_editable(self, container: Container, user_id: int) -> None:
        posts = container.blog_post_use_case()
        post = posts.create_post(user_id, "Title", "Body")
        edited = posts.update_post(post.id.value, body="Better body")
        assert edited.body == "Better body"

        posts.submit_for_moderation(post.id.value)

        with pytest.raises(PostNotEditableError):
            posts.update_post(post.id.value, title="Too late")

    def test_public_listing_shows_published_posts_newest_first(
        self, container: Container, user_id: int
    ) -> None:
        posts = container.blog_post_use_case()
        published_ids = []
        for title in ("One", "Two", "Three"):
            post = posts.create_post(user_id, title, "Body")
            posts.submit_for_moderation(post.id.value)
            posts.moderate_post(post.id.value, "publish")
            published_ids.append(post.id)
        posts.create_post(user_id, "Draft", "Body")

        page = posts.list_published_posts(Pagination(page=1, page_size=2))

        assert page.total == 3
        assert page.total_pages == 2
        assert page.has_next
        assert [p.id for p in page.items] == [published_ids[2], published_ids[1]]
        second_page = posts.list_published_posts(Pagination(page=2, page_size=2))
        assert [p.id for p in second_page.items] == [published_ids[0]]

        assert len(posts.list_posts_by_student(user_id)) == 3
        assert len(posts.list_posts_by_student(user_id, include_unpublished=True)) == 4

    def test_post_by_unknown_student(self, container: Container) -> None:
        with pytest.raises(UserNotFoundError):
            container.blog_post_use_case().create_post(808, "Title", "Body")
