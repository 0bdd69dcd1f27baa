def irc_prefix(sender):
    """
    inverse of parse.irc_prefix, without the trailing space
    """
    line = ':' + sender.name
    # an empty user still needs its '!', else a '!' in host reads as
    # coming after the '@' and the whole thing turns into the name
    if sender.user or '!' in sender.host:
        line += '!' + sender.user
    if sender.host:
        line += '@' + sender.host
    return line


def irc_line(msg):
    """
    turns a parsed message back into a line. it will look like this:
    [:name[!user][@host] ]command[ params][ :text]

    no \r\n at the end, irc_connection.send_line adds it.
    raw is ignored; whitespace is normalized to one space per boundary, so
    the result parses to the same fields but isn't always byte equal to raw
    """
    parts = []
    if msg.prefix is not None:
        parts.append(irc_prefix(msg.prefix))
    parts.append(msg.command)
    parts.extend(msg.params)
    line = ' '.join(parts)
    if msg.text:
        # after middle params the parser eats the ' :' and then one more ':'
        if msg.params and msg.text[0] == ':':
            line += ' ::' + msg.text
        else:
            line += ' :' + msg.text
    elif msg.params and msg.params[-1] == '':
        # a lone empty param only survives with the ' :' behind it
        line += ' :'
    return line
