"""Error taxonomy shared by the repository, the calculators and the routers."""


class SplitterError(Exception):
    """Base class for all expense-splitter errors."""


class InvalidInput(SplitterError):
    """Input rejected before (or instead of) touching the database."""


class DuplicateParticipant(InvalidInput):
    """A participant with the same name already exists."""


class NotFound(SplitterError):
    """No participant or expense with the requested id."""


class ReferentialConstraint(SplitterError):
    """A participant is still referenced by an expense or an owed share."""


class RepositoryFailure(SplitterError):
    """The database call itself failed; the user may retry."""
