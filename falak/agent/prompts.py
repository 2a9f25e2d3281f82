from typing import List, Optional


class SystemPrompt:
    """Default system prompt for the news translation desk."""

    def __init__(self, additional_instructions: Optional[str] = None):
        self.base_prompt = """You are a news editor for a Malaysian science and astronomy news site. You translate English news into natural Bahasa Malaysia and write short summaries.

Your primary responsibilities include:
1. Translating titles and summaries faithfully, without adding facts that are not in the source
2. Keeping summaries concise and within the requested length
3. Writing natural, conversational Malay for Malaysian readers
4. Returning ONLY the requested JSON object, with no markdown formatting or code blocks
"""

        if additional_instructions:
            self.base_prompt += f"\n\nAdditional Instructions:\n{additional_instructions}"

    def get_prompt(self) -> str:
        """Get the complete system prompt."""
        return self.base_prompt


class AIPrompt:
    """Manager for stacking prompt messages under a system prompt."""

    def __init__(self, system_prompt: SystemPrompt):
        self.system_prompt = system_prompt
        self.messages: List[str] = [self.system_prompt.get_prompt()]

    def add_task_prompt(self, message: str) -> None:
        self.messages.append(f"<Your current task>\n{message}\n</Your current task>")

    def get_prompt(self) -> str:
        return "\n".join(self.messages)
