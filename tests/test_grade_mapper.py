import pytest

from mappers.base_mapper import WriteResult
from mappers.registry import MapperRegistry
from models.evaluation import BasicEvaluation, CompleteEvaluation
from models.evaluation_criteria import EvaluationCriteria
from models.grade import Grade
from models.reference import Reference


def test_find_by_evaluation_returns_the_grade(registry: MapperRegistry, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    grade = registry.grades.create(Grade(score=4, evaluation=review, criteria=service))
    assert (review.id, service.id, grade.id) == (1, 1, 1)
    registry.grades.identity_map.reset()

    grades = registry.grades.find_by_evaluation(review)

    assert len(grades) == 1
    (found,) = grades
    assert found.score == 4
    assert found.evaluation is review
    assert found.criteria is service


def test_foreign_keys_become_references_when_not_cached(registry: MapperRegistry, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    grade = registry.grades.create(Grade(score=3, evaluation=review, criteria=service))
    registry.reset()

    found = registry.grades.find_by_id(grade.id)

    assert found.evaluation == Reference(CompleteEvaluation, review.id)
    assert found.criteria == Reference(EvaluationCriteria, service.id)
    criteria = registry.resolve(found.criteria)
    assert criteria.name == "Service"
    assert registry.criteria.find_by_id(service.id) is criteria


def test_find_by_criteria(registry: MapperRegistry, da_mario, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    cuisine = registry.criteria.create(EvaluationCriteria(name="Cuisine"))
    other = registry.complete_evaluations.create(
        CompleteEvaluation(comment="Correct", username="carol", restaurant=da_mario)
    )
    registry.grades.create(Grade(score=4, evaluation=review, criteria=service))
    registry.grades.create(Grade(score=2, evaluation=other, criteria=service))
    registry.grades.create(Grade(score=5, evaluation=review, criteria=cuisine))

    grades = registry.grades.find_by_criteria(Reference(EvaluationCriteria, service.id))

    assert sorted(grade.score for grade in grades) == [2, 4]


def test_grade_for_missing_evaluation_is_rejected(store, registry: MapperRegistry, service: EvaluationCriteria) -> None:
    grade = Grade(score=1, evaluation=Reference(CompleteEvaluation, 77), criteria=service)

    assert registry.grades.create(grade) is None
    assert grade.id is None
    assert store.ids("notes") == set()
    assert registry.grades.identity_map.is_empty()


def test_load_grades(registry: MapperRegistry, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    grade = registry.grades.create(Grade(score=4, evaluation=review, criteria=service))
    registry.reset()
    stale = registry.grades.find_by_id(grade.id)

    grades = registry.load_grades(Reference(CompleteEvaluation, review.id))

    evaluation = registry.complete_evaluations.cached(review.id)
    assert grades == {stale}
    assert evaluation.grades == grades
    assert stale.evaluation is evaluation


def test_update_score_is_idempotent(store, registry: MapperRegistry, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    grade = registry.grades.create(Grade(score=4, evaluation=review, criteria=service))
    grade.score = 5

    assert registry.grades.update(grade) is WriteResult.OK
    once = store.rows("SELECT * FROM notes")
    assert registry.grades.update(grade) is WriteResult.OK

    assert store.rows("SELECT * FROM notes") == once == [(grade.id, 5, review.id, service.id)]


def test_find_by_evaluation_links_to_the_cached_evaluation(registry: MapperRegistry, review: CompleteEvaluation, service: EvaluationCriteria) -> None:
    registry.grades.create(Grade(score=4, evaluation=review, criteria=service))
    registry.grades.identity_map.reset()
    registry.complete_evaluations.identity_map.reset()
    current = registry.complete_evaluations.find_by_id(review.id)
    assert current is not review

    (grade,) = registry.grades.find_by_evaluation(review)

    assert grade.evaluation is current
    assert grade.criteria is service


def test_load_grades_rejects_basic_evaluations(store, registry: MapperRegistry, da_mario) -> None:
    like = registry.basic_evaluations.create(
        BasicEvaluation(like_restaurant=True, ip_address="10.0.0.1", restaurant=da_mario)
    )
    store.statements.clear()

    with pytest.raises(TypeError):
        registry.load_grades(Reference(BasicEvaluation, like.id))
    with pytest.raises(TypeError):
        registry.load_grades(like)

    assert store.statements == []
    assert not hasattr(like, "grades")
