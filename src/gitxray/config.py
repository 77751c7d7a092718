"""Default configuration settings for gitxray."""

DEFAULT_CONFIG = {
	# Loose object decoding
	"objects": {
		# Leading bytes scanned for NUL when deciding if a blob is binary
		"binary_scan_limit": 8000,
	},
	# HEAD reflog reading
	"reflog": {
		# Reflog location relative to the .git directory
		"log_path": "logs/HEAD",
		# Maximum number of entries to display (0 for unlimited)
		"limit": 0,
	},
	# Ghost commit listing
	"ghosts": {
		# Prefix of suggested recovery branch names
		"branch_prefix": "recovered",
	},
}
