from __future__ import annotations

from kubechat.core.approvals.destructive import classify_command, is_destructive


def test_default_vocabulary_flags_mutating_verbs() -> None:
    assert is_destructive("kubectl delete pod crashed-pod-abc123") is True
    assert is_destructive("kubectl scale deployment frontend --replicas=5") is True
    assert is_destructive("kubectl apply -f deploy.yaml") is True
    assert is_destructive("kubectl patch svc web -p '{}'") is True


def test_read_only_commands_are_not_destructive() -> None:
    assert is_destructive("kubectl get pods -n default") is False
    assert is_destructive("kubectl describe deployment frontend") is False
    assert is_destructive("kubectl logs api-7f9c -n prod") is False


def test_matching_is_whole_word_and_case_insensitive() -> None:
    assert is_destructive("kubectl get pods -l app=deleter") is False
    assert is_destructive("KUBECTL DELETE pod x") is True


def test_classification_reports_matched_verbs_in_order() -> None:
    classification = classify_command("kubectl delete pod x && kubectl apply -f y.yaml && kubectl delete svc z")

    assert classification.is_destructive is True
    assert classification.matched_verbs == ["delete", "apply"]


def test_custom_vocabulary_replaces_default() -> None:
    assert is_destructive("kubectl scale deployment web --replicas=2", verbs=["delete"]) is False
    assert is_destructive("kubectl drain node-1", verbs=["drain", " Cordon "]) is True
    assert is_destructive("kubectl cordon node-1", verbs=["drain", " Cordon "]) is True
