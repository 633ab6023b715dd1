"""
Document module for managing document operations and database interactions.

This module provides functionality for:
- The Document base class and its BSON conversion
- MongoDB integration (connection, collections, repositories)
- Staged persistence (persist/remove/flush)
- Composable document capabilities (attribute bag, tag list)
"""
