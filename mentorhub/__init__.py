"""mentorhub — REST backend for a mentorship & learning platform."""
