APP_NAME = "Gaon Companion API"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ALLOW_ORIGINS = [
	"http://localhost",
	"http://127.0.0.1",
	"http://localhost:3000",
	"http://localhost:5000",
]
DEFAULT_TRUSTED_HOSTS = [
	"127.0.0.1",
	"localhost",
	"testserver",
]

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_OPENAI_TIMEOUT_S = 30.0
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Simulated-mode latency windows in seconds, [low, high).
REPLY_DELAY_S = (1.0, 3.0)
DISCUSSION_DELAY_S = (1.5, 2.5)
SCORING_DELAY_S = (2.0, 3.0)

CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000
DISCUSSION_TEMPERATURE = 0.8
DISCUSSION_MAX_TOKENS = 800
SCORING_TEMPERATURE = 0.3

# Upper bounds are inclusive.
GOOD_STANDING_MAX_SCORE = 4
MILD_DISTRESS_MAX_SCORE = 9

DEFAULT_VIDEO_TITLE = "영상"
