__all__ = [
    'PreconditionViolation',
    'IllegalArgumentException',
    'IllegalStateException',
    'check_argument',
    'check_not_none',
    'check_state',
]


class PreconditionViolation(Exception):
    pass


class IllegalArgumentException(PreconditionViolation):
    pass


class IllegalStateException(PreconditionViolation):
    pass


def check_argument(cond, message=None, *message_args):
    _check(cond, IllegalArgumentException, message, message_args)


def check_state(cond, message=None, *message_args):
    _check(cond, IllegalStateException, message, message_args)


def check_not_none(value, message=None, *message_args):
    _check(value is not None, IllegalArgumentException, message, message_args)
    return value


def _check(cond, exc_class, message, message_args):
    if not cond:
        if message is None:
            raise exc_class
        else:
            raise exc_class(message % message_args)
