#!/usr/bin/env python3

"""
connects to one irc server, registers, joins channels and logs every
parsed message until the server hangs up or ctrl-c.

config is a json file like
{
    "host": "irc.libera.chat",
    "port": 6697,
    "use_ssl": true,
    "nick": "ircline",
    "user": "ircline",
    "realname": "ircline example",
    "password": "",
    "channels": ["#ircline"]
}
"""

import argparse
import asyncio
import json
import logging

# local
import ircline.irc_connection
import ircline.parse
import ircline.unparse
import ircline.util

logging.basicConfig(
    format = '▸ %(asctime)s.%(msecs)03d %(filename)s:%(lineno)d %(levelname)s %(message)s',
    level = logging.DEBUG,
    datefmt = '%H:%M:%S',
)


def load_config(conf_file):
    with open(conf_file) as f:
        conf = json.loads(f.read())
    conf.setdefault('port', 6667)
    conf.setdefault('use_ssl', False)
    conf.setdefault('password', '')
    conf.setdefault('channels', [])
    conf.setdefault('user', conf['nick'])
    conf.setdefault('realname', conf['nick'])
    return conf


class client:

    def __init__(self, conf):
        self.conf = conf
        self.logger = logging.getLogger(__name__)
        self.conn = None

    def register(self):
        """
        lines sent right after connecting. the library has no command
        builders, so this is plain string formatting
        """
        if self.conf['password']:
            yield 'PASS ' + self.conf['password']
        yield 'NICK ' + self.conf['nick']
        yield 'USER {} 8 * :{}'.format(self.conf['user'], self.conf['realname'])

    async def reader(self):
        while True:
            msg = await self.conn.read_message()
            # the \r ends up in whichever field is last, text or a param
            msg = ircline.parse.irc_message(msg.raw.rstrip('\r'))
            self.logger.info(
                'parsed <prefix> %s <command> %s <params> %s <text> %s',
                msg.prefix, msg.command, msg.params, msg.text)
            if msg.command == 'PING':
                # keep the server's token, swap the command
                pong = msg._replace(command='PONG', prefix=None)
                await self.conn.send_line(ircline.unparse.irc_line(pong))
            elif msg.command == '001':
                for chan in self.conf['channels']:
                    await self.conn.send_line('JOIN ' + chan)

    async def run(self):
        self.conn = await ircline.irc_connection.connect(
            self.conf['host'], self.conf['port'], self.conf['use_ssl'])
        try:
            for line in self.register():
                await self.conn.send_line(line)
            await self.reader()
        except ircline.irc_connection.connection_closed:
            self.logger.info('server hung up')
        finally:
            if not self.conn.closed:
                await self.conn.close()


def main():

    parser = argparse.ArgumentParser()
    parser.add_argument('CONFIGPATH', type=str, help='path to config.json')
    args = parser.parse_args()

    conf = load_config(args.CONFIGPATH)
    if conf.get('disabled'):
        logging.info('server %s is disabled', conf['host'])
        return

    ioloop = ircline.util.create_loop()
    try:
        ioloop.run_until_complete(client(conf).run())
    except KeyboardInterrupt:
        logging.info('bye')
    finally:
        ioloop.close()


if __name__ == '__main__':
    main()
