"""
UI Module - Discord UI Components and the card viewer core

Available components:
- CardSequencer: Playing/Paused state machine over a member's cards
- AutoAdvanceDriver / mount: the single cancellable timer driving a sequencer
- ShareExporter: captures the current card and hands it to a share target
- WrappedViewerView: interactive message playing a member's Wrapped
- LeaderboardView: paginated leaderboards with a category picker
- MemberPaginationView: searchable member directory
"""
