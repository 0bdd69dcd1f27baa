import collections


"""
prefix is the optional origin of a message, <servername> or
<nickname> [ [ "!" <user> ] "@" <host> ]
user and host are '' when the line didn't carry them
"""
prefix = collections.namedtuple('prefix', ['name', 'user', 'host'])

"""
prefix is None when the line didn't start with ':', so an absent prefix is
never confused with a present but empty one
"""
message = collections.namedtuple(
    'message', ['command', 'params', 'prefix', 'text', 'raw'])


def split2(msg, sep):
    """
    split msg at the first sep, return (head, tail)
    tail is '' when sep is not found

    split2("a b c", " ") == ("a", "b c")
    """
    head, _, tail = msg.partition(sep)
    return head, tail


def irc_prefix(msg):
    """
    return (prefix or None, remaining of msg)

    the prefix body is cut at the first space. an '@' after any '!' starts
    the host, a '!' before any '@' starts the user. '!' and '@' in any other
    order stay in the name
    """
    if not msg or msg[0] != ':':
        return None, msg

    head, tail = split2(msg[1:], ' ')
    user = ''
    host = ''
    bang = head.find('!')
    at = head.find('@')
    if at > bang:
        host = head[at + 1:]
        head = head[:at]
    if bang != -1 and (at == -1 or bang < at):
        user = head[bang + 1:]
        head = head[:bang]
    return prefix(head, user, host), tail


def irc_params(msg):
    """
    return (list of middle params, remaining of msg)
    """
    if not msg or msg[0] == ':':
        return [], msg
    head, tail = split2(msg, ' :')
    return head.split(' '), tail


# this is not a validator, every str gives back some message
def irc_message(msg):
    """
    The extracted message is parsed into the components <prefix>,
    <command>, list of parameters (<params>) and the trailing <text>.

    The Augmented BNF representation for this is:

    message  =  [ ":" prefix SPACE ] command [ params ] crlf
    prefix   =  servername / ( nickname [ [ "!" user ] "@" host ] )
    command  =  1*letter / 3digit
    params   =  *14( SPACE middle ) [ SPACE ":" trailing ]
           =/ 14( SPACE middle ) [ SPACE [ ":" ] trailing ]

    nospcrlfcl =  %x01-09 / %x0B-0C / %x0E-1F / %x21-39 / %x3B-FF
            ; any octet except NUL, CR, LF, " " and ":"
    middle   =  nospcrlfcl *( ":" / nospcrlfcl )
    trailing   =  *( ":" / " " / nospcrlfcl )

    SPACE    =  %x20    ; space character
    crlf     =  %x0D %x0A   ; "carriage return" "linefeed"

    each stage eats the front of the line and hands the tail to the next one.
    params are split on single spaces, so doubled spaces give '' params
    """
    sender, tail = irc_prefix(msg)
    command, tail = split2(tail, ' ')
    params, tail = irc_params(tail)
    if tail and tail[0] == ':':
        tail = tail[1:]
    return message(command, params, sender, tail, msg)
