"""Certificate document location."""

from academy.domain.common.value_objects.ids import ProgramId, UserId


class UrlCertificateFileGenerator:
    """
    Build the URL under which a certificate document is published.

    Rendering the document itself happens out of process; the URL is
    deterministic per (user, program) so re-issuing points at the same file.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def generate(self, user_id: UserId, program_id: ProgramId) -> str:
        return f"{self.base_url}/users/{user_id.value}/programs/{program_id.value}.pdf"
