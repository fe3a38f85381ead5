"""
QUERIES - Read operations (CQRS)

Queries do not change domain state. Two record incidental facts: opening a
conversation marks inbound messages read, and fetching a video tracks the
view.

Subfolders:
- conversations/ → list_conversations, get_conversation_messages
- interests/     → list_interests
- videos/        → get_video, list_feed, video_analytics
- users/         → get_profile, list_blocked
- notifications/ → list_notifications
"""
