"""Session constants: phases, draft stages and wire event names"""

# Session phases
PHASE_LOBBY = 'lobby'
PHASE_DRAFTING = 'drafting'
PHASE_REVEALING = 'revealing'
PHASE_GAME_OVER = 'game_over'

# Draft round stages
DRAFT_IDLE = 'idle'
DRAFT_AWAITING_SUBMISSION = 'awaiting_submission'
DRAFT_AWAITING_PICKS = 'awaiting_picks'
DRAFT_COMPLETE = 'complete'

# Defaults
DEFAULT_MIN_PLAYERS = 2
DEFAULT_MAX_PLAYERS = 7
DEFAULT_HISTORY_CAPACITY = 20

# Inbound events
EVENT_JOIN_GAME = 'join_game'
EVENT_REQUEST_HISTORY = 'request_history'
EVENT_START_GAME = 'start_game_signal'
EVENT_SUBMIT_PACK = 'submit_pack'
EVENT_PICK_CARD = 'pick_card'
EVENT_READY_TO_PRESENT = 'ready_to_present'
EVENT_REVEAL_STEP = 'reveal_step'
EVENT_FINISH_TURN = 'finish_turn'

# Outbound events
MSG_ERROR = 'error_msg'
MSG_UPDATE_PLAYER_LIST = 'update_player_list'
MSG_MOVE_TO_INPUT = 'move_to_input'
MSG_UPDATE_SUBMIT_STATUS = 'update_submit_status'
MSG_NEXT_DRAFT_TURN = 'next_draft_turn'
MSG_START_REVEAL_PHASE = 'start_reveal_phase'
MSG_UPDATE_REVEAL_STATUS = 'update_reveal_status'
MSG_YOUR_REVEAL_TURN = 'your_reveal_turn'
MSG_ANNOUNCE_START = 'announce_start'
MSG_SHOW_STEP = 'show_step'
MSG_GAME_OVER = 'game_over'
MSG_RECEIVE_HISTORY = 'receive_history'
