"""Project-name matching for imported rows.

Matching is an ordered list of matcher functions. Each stage scans every
candidate project before the next, looser stage is tried; the first hit
wins. To add a stage (e.g. accent-insensitive), append a function with the
``ProjectMatcher`` signature to the list.
"""

from typing import Callable, Iterable, Optional, Sequence

from timebudget.models.project import Project

ProjectMatcher = Callable[[str, Project], bool]


def match_exact_name(needle: str, project: Project) -> bool:
    """Case-insensitive equality of the full name."""
    return project.name.casefold() == needle.casefold()


def match_name_substring(needle: str, project: Project) -> bool:
    """The row's text occurs within the project's name, case-insensitive."""
    return needle.casefold() in project.name.casefold()


DEFAULT_MATCHERS: Sequence[ProjectMatcher] = (match_exact_name, match_name_substring)


def find_project(
    name: str,
    projects: Iterable[Project],
    matchers: Sequence[ProjectMatcher] = DEFAULT_MATCHERS,
) -> Optional[Project]:
    """Find the project a row refers to.

    Args:
        name: Project name text from the row
        projects: Candidate projects
        matchers: Match stages, strictest first

    Returns:
        The first project matched by the earliest stage, or None

    Example:
        >>> projects = [Project(id="1", name="Villa Amsterdam Noord")]
        >>> find_project("villa amsterdam", projects).id
        '1'
    """
    needle = name.strip()
    if not needle:
        return None

    candidates = list(projects)
    for matcher in matchers:
        for project in candidates:
            if matcher(needle, project):
                return project
    return None
