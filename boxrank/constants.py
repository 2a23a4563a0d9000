"""Constants and display defaults for box standings."""

# Points awarded per set won in a box match
POINTS_PER_SET = 2

# (background, foreground) colour pairs
WIN_COLORS = ('#d4edda', '#155724')
LOSS_COLORS = ('#f8d7da', '#721c24')
NEUTRAL_COLORS = ('#f3f4f6', '#6b7280')
SCHEDULED_COLORS = ('#ffffff', '#666666')
UNPLAYED_COLORS = ('#ffffff', '#666666')
DIAGONAL_COLORS = ('#000000', '#ffffff')

UNPLAYED_TEXT = '-'
DIAGONAL_TEXT = '-'

# Short cell texts for special cases, keyed by (marker kind, is_self)
SPECIAL_TEXTS = {
    ('no_show', True): 'Abs.',
    ('no_show', False): 'Adv.\nAbs.',
    ('retired', True): 'Inj.',
    ('retired', False): 'Inj.\nAdv.',
    ('delayed', True): 'R',
    ('delayed', False): 'R.A',
}

# Long labels for special cases
SPECIAL_LABELS = {
    ('no_show', True): 'Absent',
    ('no_show', False): 'Opponent absent',
    ('retired', True): 'Injured',
    ('retired', False): 'Opponent injured',
    ('delayed', True): 'Rescheduled',
    ('delayed', False): 'Opponent rescheduled',
}

# Marker kinds in resolution priority order
MARKER_PRIORITY = ('no_show', 'retired', 'delayed')

# Next box status tags and their row accent colours
NEXT_BOX_CONTINUE = 'continue'
NEXT_BOX_STOP = 'stop'
NEXT_BOX_STATUS_COLORS = {
    NEXT_BOX_CONTINUE: '#10b981',
    NEXT_BOX_STOP: '#ef4444',
}

SEASON_STATUS_RUNNING = 'running'
