from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from academy.application.catalog.use_cases.catalog_link_use_case import CatalogLinkUseCase
from academy.application.catalog.use_cases.lesson_material_use_case import (
    LessonMaterialUseCase,
)
from academy.application.catalog.use_cases.lesson_use_case import LessonUseCase
from academy.application.catalog.use_cases.module_use_case import CourseUseCase, ModuleUseCase
from academy.application.catalog.use_cases.program_use_case import ProgramUseCase
from academy.application.commerce.use_cases.enrollment_use_case import EnrollmentUseCase
from academy.application.commerce.use_cases.payment_use_case import PaymentUseCase
from academy.application.community.use_cases.blog_post_use_case import BlogPostUseCase
from academy.application.community.use_cases.discussion_use_case import DiscussionUseCase
from academy.application.identity.use_cases.teaching_group_use_case import (
    TeachingGroupUseCase,
)
from academy.application.identity.use_cases.user_use_case import UserUseCase
from academy.application.progress.use_cases.certificate_use_case import CertificateUseCase
from academy.application.progress.use_cases.completion_use_case import CompletionUseCase
from academy.config import get_settings
from academy.domain.community.services.discussion_thread_service import (
    DiscussionThreadService,
)
from academy.infrastructure.catalog.repositories.catalog_link_repository import (
    CatalogLinkRepository,
)
from academy.infrastructure.catalog.repositories.lesson_material_repository import (
    ExerciseRepository,
    QuizRepository,
)
from academy.infrastructure.catalog.repositories.lesson_repository import LessonRepository
from academy.infrastructure.catalog.repositories.module_repository import (
    CourseRepository,
    ModuleRepository,
)
from academy.infrastructure.catalog.repositories.program_repository import ProgramRepository
from academy.infrastructure.commerce.repositories.enrollment_repository import (
    EnrollmentRepository,
)
from academy.infrastructure.commerce.repositories.payment_repository import PaymentRepository
from academy.infrastructure.common.unit_of_work import SqlAlchemyUnitOfWork
from academy.infrastructure.community.repositories.blog_post_repository import (
    BlogPostRepository,
)
from academy.infrastructure.community.repositories.discussion_repository import (
    DiscussionRepository,
)
from academy.infrastructure.identity.repositories.teaching_group_repository import (
    TeachingGroupRepository,
)
from academy.infrastructure.identity.repositories.user_repository import UserRepository
from academy.infrastructure.identity.services.password_service import PasswordService
from academy.infrastructure.notifications.logging_notifier import LoggingNotifier
from academy.infrastructure.progress.repositories.certificate_repository import (
    CertificateRepository,
)
from academy.infrastructure.progress.repositories.program_completion_repository import (
    ProgramCompletionRepository,
)
from academy.infrastructure.progress.services.certificate_file_generator import (
    UrlCertificateFileGenerator,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Singleton(get_settings)

    # Adapters
    notifier = providers.Singleton(LoggingNotifier)
    password_hasher = providers.Singleton(
        PasswordService, pepper=settings.provided.PASSWORD_PEPPER
    )
    certificate_file_generator = providers.Singleton(
        UrlCertificateFileGenerator, base_url=settings.provided.CERTIFICATE_BASE_URL
    )

    # One unit of work per use case; units sharing the session nest
    uow = providers.Factory(
        SqlAlchemyUnitOfWork,
        db=db,
        notifier=notifier,
        serializable_isolation=settings.provided.SERIALIZABLE_ISOLATION,
    )

    # Catalog repositories
    program_repository = providers.Factory(ProgramRepository, db=db)
    module_repository = providers.Factory(ModuleRepository, db=db)
    course_repository = providers.Factory(CourseRepository, db=db)
    lesson_repository = providers.Factory(LessonRepository, db=db)
    catalog_link_repository = providers.Factory(CatalogLinkRepository, db=db)
    quiz_repository = providers.Factory(QuizRepository, db=db)
    exercise_repository = providers.Factory(ExerciseRepository, db=db)

    # Identity repositories
    user_repository = providers.Factory(UserRepository, db=db)
    teaching_group_repository = providers.Factory(TeachingGroupRepository, db=db)

    # Commerce repositories
    enrollment_repository = providers.Factory(EnrollmentRepository, db=db)
    payment_repository = providers.Factory(PaymentRepository, db=db)

    # Progress repositories
    completion_repository = providers.Factory(ProgramCompletionRepository, db=db)
    certificate_repository = providers.Factory(CertificateRepository, db=db)

    # Community repositories
    discussion_repository = providers.Factory(DiscussionRepository, db=db)
    blog_post_repository = providers.Factory(BlogPostRepository, db=db)

    # Domain services (pure domain logic, no db)
    discussion_thread_service = providers.Factory(DiscussionThreadService)

    # Catalog module, application use cases
    program_use_case = providers.Factory(
        ProgramUseCase, program_repository=program_repository, uow=uow
    )
    module_use_case = providers.Factory(
        ModuleUseCase, module_repository=module_repository, uow=uow
    )
    course_use_case = providers.Factory(
        CourseUseCase, course_repository=course_repository, uow=uow
    )
    lesson_use_case = providers.Factory(
        LessonUseCase,
        lesson_repository=lesson_repository,
        course_repository=course_repository,
        uow=uow,
    )
    catalog_link_use_case = providers.Factory(
        CatalogLinkUseCase,
        link_repository=catalog_link_repository,
        program_repository=program_repository,
        module_repository=module_repository,
        course_repository=course_repository,
        uow=uow,
    )
    lesson_material_use_case = providers.Factory(
        LessonMaterialUseCase,
        quiz_repository=quiz_repository,
        exercise_repository=exercise_repository,
        lesson_repository=lesson_repository,
        uow=uow,
    )

    # Identity module, application use cases
    teaching_group_use_case = providers.Factory(
        TeachingGroupUseCase, teaching_group_repository=teaching_group_repository, uow=uow
    )
    user_use_case = providers.Factory(
        UserUseCase,
        user_repository=user_repository,
        teaching_group_repository=teaching_group_repository,
        password_hasher=password_hasher,
        uow=uow,
    )

    # Commerce module, application use cases
    enrollment_use_case = providers.Factory(
        EnrollmentUseCase,
        enrollment_repository=enrollment_repository,
        payment_repository=payment_repository,
        completion_repository=completion_repository,
        user_repository=user_repository,
        program_repository=program_repository,
        uow=uow,
    )
    payment_use_case = providers.Factory(
        PaymentUseCase,
        payment_repository=payment_repository,
        enrollment_repository=enrollment_repository,
        uow=uow,
    )

    # Progress module, application use cases
    certificate_use_case = providers.Factory(
        CertificateUseCase,
        certificate_repository=certificate_repository,
        completion_repository=completion_repository,
        file_generator=certificate_file_generator,
        uow=uow,
    )
    completion_use_case = providers.Factory(
        CompletionUseCase,
        completion_repository=completion_repository,
        enrollment_repository=enrollment_repository,
        certificate_use_case=certificate_use_case,
        uow=uow,
    )

    # Community module, application use cases
    discussion_use_case = providers.Factory(
        DiscussionUseCase,
        discussion_repository=discussion_repository,
        lesson_repository=lesson_repository,
        uow=uow,
        thread_service=discussion_thread_service,
    )
    blog_post_use_case = providers.Factory(
        BlogPostUseCase,
        post_repository=blog_post_repository,
        user_repository=user_repository,
        uow=uow,
    )


# Initialize container
container = Container()
