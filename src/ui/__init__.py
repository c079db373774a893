"""NiceGUI interface - thin visualization layer for the mentor chat.

Responsibilities:
    - Conversation display with markdown rendering for mentor replies
    - File picker for PDF and text drafts, with a removable pending attachment
    - Descriptor 3 quick reference sidebar and disclaimer

Contains no session logic. Delegates every operation to the SessionManager.
"""
