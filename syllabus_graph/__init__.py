"""
Syllabus Graph - curriculum knowledge graph content service.

Models a curriculum as a Neo4j graph of syllabus concepts
(Subject -> Matter -> Molecule -> Atom -> Particle, plus Grade/Topic),
resources, questions and per-user learning paths.
"""

__version__ = "1.0.0"
