# Caller-facing summaries
INVALID_JSON_BODY = 'Invalid JSON body'
INVALID_URL = 'Invalid URL passed'
INVALID_CUSTOM_ID = 'Invalid ID passed'
ID_ALREADY_USED = 'Validation error: ID already used: {hash}'
TRY_AGAIN = 'Service temporarily unavailable, please try again.'
RESERVATION_FAILED = 'Could not create the link.'

# Log events
LINK_CREATED = 'LINK_CREATED'
LINK_HASH_TAKEN = 'LINK_HASH_TAKEN'
LINK_HASH_COLLISION = 'LINK_HASH_COLLISION'
LINK_RESERVATION_FAILED = 'LINK_RESERVATION_FAILED'
LINK_INVALID_REQUEST = 'LINK_INVALID_REQUEST'
