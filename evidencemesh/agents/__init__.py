from evidencemesh.agents.decompose import decompose_question, parse_sub_questions
from evidencemesh.agents.llm import complete
from evidencemesh.agents.summarize import summarize_papers

__all__ = ["complete", "decompose_question", "parse_sub_questions", "summarize_papers"]
