# Caller-facing summaries
LISTING_FAILED = 'Could not list links.'

# Log events
LINKS_LISTED = 'LINKS_LISTED'
LINKS_LISTING_FAILED = 'LINKS_LISTING_FAILED'
