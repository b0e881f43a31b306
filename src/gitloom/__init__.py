"""gitloom: terminal front-end for git status and history rewrites."""
