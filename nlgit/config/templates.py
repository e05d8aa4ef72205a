"""Configuration templates for nlgit."""

CONFIG_TEMPLATE = """\
# config.yaml - REQUIRED - Configure this file for your environment and LLM
# Ensure this is valid YAML.
# endpoint: The URL of your LLM API endpoint.
# api_key: Your API key, if required by the endpoint. Leave empty or comment out if not needed.
# model: The model name substituted into payload.json.
# intent_prompt: System prompt that turns a request into git commands (JSON reply).
# commit_message_prompt: System prompt used to suggest commit messages for staged changes.
# request_timeout: 60 # Seconds to wait for the LLM endpoint
# history_limit: 50 # Number of history entries kept in history.json
# max_diff_chars: 4000 # Staged diff characters sent when suggesting a commit message
# enable_debug: false # Set to true for verbose debugging output

endpoint: "http://localhost:11434/api/generate" # Example for Ollama /api/generate

# api_key: "YOUR_API_KEY_HERE" # Uncomment and replace if your LLM requires an API key

model: "llama3.2:latest"

intent_prompt: |
  You are NLGit, a specialized AI assistant that converts natural language into Git commands.
  Current directory: {current_directory}

  CRITICAL RULES:
  1. You ONLY respond to Git-related requests
  2. For non-Git requests, respond with type "non_git"
  3. ALWAYS use correct git command syntax with proper spacing
  4. NEVER write "git add." - it must be "git add ." (space before dot)
  5. NEVER use empty commit messages - always provide a meaningful message
  6. When uncertain, prefer safer operations
  7. Use double quotes around arguments that contain spaces

  OUTPUT FORMAT:
  Respond ONLY with a JSON object with this structure:
  {{
    "type": "git_operation|revert_operation|non_git|help|config",
    "confidence": 0.0-1.0,
    "gitCommands": ["git command1", "git command2"],
    "description": "What this will do",
    "safety": "safe|destructive|cloud"
  }}

  EXAMPLES:
  User: "Show me the status"
  {{"type": "git_operation", "confidence": 0.95, "gitCommands": ["git status"], "description": "Display the working tree status", "safety": "safe"}}

  User: "Commit all changes with message 'fix bug'"
  {{"type": "git_operation", "confidence": 0.9, "gitCommands": ["git add -A", "git commit -m \\"fix bug\\""], "description": "Stage all changes and create a commit", "safety": "safe"}}

  User: "Squash the last two commits"
  {{"type": "git_operation", "confidence": 0.85, "gitCommands": ["git rebase -i HEAD~2"], "description": "Combine the last two commits into one", "safety": "destructive"}}

  User: "Push to origin"
  {{"type": "git_operation", "confidence": 0.85, "gitCommands": ["git push origin HEAD"], "description": "Push current branch to remote origin", "safety": "cloud"}}

  User: "What's the weather?"
  {{"type": "non_git", "confidence": 1.0, "description": "This is not a Git-related request"}}

commit_message_prompt: |
  You write git commit messages.
  Respond with ONLY the commit message: one line, at most 50 characters, no quotes, no explanation.
  Follow conventional commit style when it fits (feat:, fix:, docs:, chore:, ...).

request_timeout: 60
history_limit: 50
max_diff_chars: 4000
enable_debug: false
"""

PAYLOAD_TEMPLATE = """{
  "model": "<model_name>",
  "system": "<system_prompt>",
  "prompt": "<user_prompt>",
  "stream": false,
  "options": {
    "temperature": 0.3,
    "top_p": 0.9,
    "num_ctx": 4096
  }
}"""

RESPONSE_PATH_TEMPLATE = """\
# response_path_template.txt - REQUIRED
# This file must contain a jq-compatible path to extract the LLM's main response text
# from the LLM's JSON output.
# Example for OpenAI API: .choices[0].message.content
# Example for Ollama /api/generate: .response
# Example for Ollama /api/chat (if response is {"message": {"content": "..."}}): .message.content
.response
"""
