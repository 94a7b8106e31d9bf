"""Infrastructure: document store implementations (Firestore REST, in-memory)."""
