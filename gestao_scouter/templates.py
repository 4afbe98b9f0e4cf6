from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateDefinition:
    name: str
    content: str


TEMPLATES: dict[str, TemplateDefinition] = {
    "retomada_contato_v1": TemplateDefinition(
        "retomada_contato_v1",
        "Olá {first_name}! Aqui é da equipe {project}. Podemos continuar nossa conversa?",
    ),
    "confirmacao_agendamento_v1": TemplateDefinition(
        "confirmacao_agendamento_v1",
        "Olá {first_name}, confirmando seu agendamento em {date} às {time}. Responda SIM para confirmar.",
    ),
    "janela_proativa_v1": TemplateDefinition(
        "janela_proativa_v1",
        "Olá! Só passando para ver se você tem alguma dúvida ou se posso ajudar com algo mais. 😊",
    ),
}


def render_template(name: str, **variables: str) -> str:
    template = TEMPLATES.get(name)
    if not template:
        raise ValueError(f"Unknown template: {name}")
    return template.content.format(**variables)
