"""Short-form video analysis prompt templates.

Contains prompts for:
- TRANSCRIPT_ANALYZER: Breakdown of hook, structure, pacing and emotion
- IDEA_GENERATOR: New content ideas built from an analysis
"""

# Transcript Analyzer prompt
# Template placeholders: {title}, {channel}, {view_count}, {transcript}
TRANSCRIPT_ANALYZER = """You are a short-form video strategist who reverse-engineers why videos perform.

VIDEO
- Title: {title}
- Channel: {channel}
- Views: {view_count}

TRANSCRIPT
<<<
{transcript}
>>>

TASK
Break down how this video holds attention.

OUTPUT FORMAT (JSON object, all keys required):
{{
  "hook": "The opening line or device used in the first 3 seconds",
  "entryStyle": "How the creator enters the video (question, bold claim, story, demo...)",
  "niche": "The content niche in 2-5 words",
  "structure": "The beat-by-beat structure, e.g. Hook -> Problem -> Steps -> CTA",
  "lengthSeconds": 45,
  "pace": "slow|moderate|fast",
  "emotion": "The dominant emotion the video creates"
}}

RULES
1. Base every field on the transcript, not on the title alone
2. lengthSeconds is an integer estimate of the spoken length
3. Return ONLY the JSON object, no markdown, no extra text
"""

# Idea Generator prompt
# Template placeholders: {analysis_json}, {count}
IDEA_GENERATOR = """You are a creative strategist for short-form video creators.

Below is an analysis of a video that performed well:
<<<
{analysis_json}
>>>

TASK
Generate {count} new video ideas in the same niche that reuse what worked
(hook style, structure, pace and emotion) without copying the topic.

OUTPUT FORMAT (JSON array):
[
  {{
    "title": "Working title",
    "hook": "The exact opening line",
    "outline": "1. ... 2. ... 3. ...",
    "suggestedLength": 45,
    "tone": "Educational"
  }}
]

RULES
1. Generate EXACTLY {count} ideas
2. title, hook and outline are required; suggestedLength (seconds) and tone are optional
3. Return ONLY the JSON array, no markdown, no extra text
"""
