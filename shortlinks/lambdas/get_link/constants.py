# Caller-facing summaries
INVALID_ID = 'Invalid ID passed'
LINK_NOT_FOUND_SUMMARY = 'Link not found with short ID: {hash}'
LOOKUP_FAILED = 'Could not retrieve the link.'

# Log events
LINK_FOUND = 'LINK_FOUND'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
LINK_LOOKUP_FAILED = 'LINK_LOOKUP_FAILED'
