from retype.spec.exceptions import NotInitializedError
from retype.spec.protocols import LanguageProviderProtocol
from retype.workspace.project import Project


class ProjectService:
    """Base for services that operate on a loaded project."""

    def __init__(self, project: Project):
        self._project = project

    @property
    def project(self) -> Project:
        if self._project is None or not self._project.loaded:
            raise NotInitializedError("Project has not been loaded. Call load() first.")
        return self._project

    @property
    def provider(self) -> LanguageProviderProtocol:
        return self.project.provider
