"""
qwen_export package

Conversion pipeline that turns a ChatGPT export (branching message trees)
into the Qwen chat export format (one linear message list per chat).

To run:

python -m qwen_export.convert [INPUT_JSON] [OUTPUT_JSON] --limit 20

Sample result in CLI:

========================================================================
Conversion complete
========================================================================
Input:  examples/conversations.json
Output: output/qwen_chats.json
Conversations: 20 (latest 20)

"""
