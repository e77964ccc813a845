"""
Voice catalog and synthesis engine seam.

    - catalog.py: VoiceProfile and VoiceCatalog (static voice list)
    - engine.py: BaseSynthesisEngine and the PlaceholderEngine stub
"""
