PONG = 'pong!'

# Log events
PING = 'PING'
