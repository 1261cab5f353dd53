"""Exceptions raised by the wiki_path package."""


class WikiPathError(Exception):
    """Base class for all wiki_path errors."""


class FetchError(WikiPathError):
    """An article page could not be fetched or decoded.

    The search recovers from this: the article is treated as having no
    outgoing links.
    """

    def __init__(self, identifier: str, url: str, cause: BaseException | str) -> None:
        self.identifier = identifier
        self.url = url
        self.cause = cause
        super().__init__(f"could not fetch {identifier!r} ({url}): {cause}")


class CredentialError(WikiPathError):
    """The persisted configuration could not be read or written."""
