"""Content layer for the Lakeshore Ragdolls website."""
