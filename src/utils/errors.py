"""Error handling utilities."""


class DealDeskError(Exception):
    """Base exception for the deal desk backend."""
    pass


class SupabaseError(DealDeskError):
    """Supabase operation error."""
    pass


class FeeScheduleError(DealDeskError):
    """Fee schedule configuration could not be loaded or is invalid."""
    pass


class NoticeError(DealDeskError):
    """Invalid contract notice request."""
    pass


class NotFoundError(DealDeskError):
    """Requested record does not exist."""
    pass
