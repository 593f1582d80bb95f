"""Core building blocks shared by all quill-commons platforms."""
