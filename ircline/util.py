import asyncio
import logging

logger = logging.getLogger(__name__)


def log_loop_error(loop, context):
    """
    exception handler for loops made by create_loop. errors nobody awaited,
    like a failed callback or a dropped task that never had its exception
    read, land here and go to the log instead of stderr
    """
    # context["message"] will always be there; but context["exception"] may not
    logger.error(
        'unhandled in event loop: %s', context['message'],
        exc_info=context.get('exception'))


def create_loop(debug=True):
    """
    new event loop to run irc_connection coroutines on, with
    log_loop_error installed. debug mode reports coroutines that were never
    awaited and callbacks that hog the loop
    """
    ioloop = asyncio.new_event_loop()
    ioloop.set_exception_handler(log_loop_error)
    ioloop.set_debug(debug)
    return ioloop
