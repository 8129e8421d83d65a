from enum import Enum
# enumerations.py


class Operation(str, Enum):
    SAVE = 'Save'
    UPDATE = 'Update'
    CANCEL = 'Cancel'
    DELETE = 'Delete'
    LIST = 'List'
    SEARCH = 'Search'
    VIEW = 'View'
    NEXT = 'Next'
    PREVIOUS = 'Previous'
    NEW = 'New'
    GO = 'Go'
    BACK = 'Back'
    RESET = 'Reset'
    LOGOUT = 'Logout'
    # screen-specific operations
    SIGN_IN = 'Sign In'
    SIGN_UP = 'Sign Up'
    REGISTER = 'Register'
    CHANGE_MY_PROFILE = 'Change My Profile'

    @classmethod
    def parse(cls, raw):
        """Case-insensitive lookup; returns None for blank or unknown names."""
        if raw is None:
            return None
        text = str(raw).strip().lower()
        for op in cls:
            if op.value.lower() == text:
                return op
        return None


# operations that never trigger field validation
UNVALIDATED_OPERATIONS = frozenset(
    {Operation.CANCEL, Operation.VIEW, Operation.DELETE, Operation.RESET}
)


class MessageType(str, Enum):
    SUCCESS = 'success'
    ERROR = 'error'


class Gender(str, Enum):
    MALE = 'Male'
    FEMALE = 'Female'
