"""
Whisperwire Compliance Engine Service.

Evaluates live call transcripts and call metadata against the TCPA /
Telemarketing Sales Rule library, raising one alert per rule per call
with evidence and suggesting corrective lines for the agent.
"""
